"""
Test suite for MediBook.

Contains unit and integration tests for the API and the Python client.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
