# ============================================================================
# LOCAL TESTING SCRIPTS
# ============================================================================
# PURPOSE: Local test client for the task queue
# AZURE FUNCTIONS: This folder is NOT deployed - for local testing only
# ============================================================================

"""
Local scripts for the Service Bus task queue.

    send_test_messages: Interactive client that publishes sample task messages

These scripts are NOT deployed to Azure Functions.
"""
