"""IssueForge issue tracker.

A FastAPI application for managing issues with:
- RESTful CRUD operations
- SQLAlchemy ORM with async support
- A Streamlit single-page client talking to the API over httpx
"""

__version__ = "2.0.0"
