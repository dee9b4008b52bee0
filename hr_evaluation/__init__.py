"""
HR evaluation periodization and aggregation engine.

Groups performance evaluations into semesters/quarters according to the
employee's department, folds them into yearly totals and decides bonus
eligibility. Pure computation over records fetched by the caller.
"""
__version__ = "1.0.0"
