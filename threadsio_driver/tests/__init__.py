"""
Test suite for Threads.io driver.

Tests are organized into:
- test_client.py - Client actions, dispatch and configuration tests
- test_exceptions.py - Exception hierarchy and classification tests
- test_building_blocks.py - Date formatting, request and response tests
- test_service.py - Entity facade and workflow tests
- test_main.py - Keboola component row dispatch tests
- conftest.py - Pytest fixtures and configuration

Run tests with:
    pytest threadsio_driver/tests/
    pytest threadsio_driver/tests/ -v
    pytest threadsio_driver/tests/ --cov=threadsio_driver
"""
