"""
Churn Predictor
===============

Customer churn prediction web application: a Streamlit front end that
collects customer attributes, a FastAPI gateway that relays them to a
hosted inference endpoint, and a PDF report generator.

Modules:
    - api: FastAPI gateway
    - features: Form validation and feature encoding
    - reports: PDF report generation
    - dashboard: Streamlit frontend
    - utils: Utility functions
"""

__version__ = "1.0.0"
__author__ = "Muhammad Abdullah"
