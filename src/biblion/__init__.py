"""BIBLION

An in-memory lending-library ledger. It tracks physical copies of books, loans
and their due dates, overdue penalties, and borrowing eligibility, driven
entirely by caller-supplied dates.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
