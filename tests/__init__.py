"""
Finance Tracker Test Suite

This package contains the tests for the finance tracker API and client:

- test_app.py: Application factory, health, error answers, store lifecycle
- test_categories.py: Category listing, creation defaults, restricted delete
- test_transactions.py: Transaction filters, create/update/delete
- test_budgets.py: Budget filters and upsert behaviour
- test_dashboard.py: Monthly totals and budget progress
- test_schema.py: Table constraints and default category seeding (SQLite)
- test_client.py: HTTP client wrapper and error normalization

Run with: pytest tests/ -v
"""
