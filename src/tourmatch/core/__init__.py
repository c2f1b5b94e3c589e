"""Core domain package for tourmatch.

Core contains places, preferences, tour admission, and confirmation observers
without any mail, tax-service, or file-specific code, keeping the business
rules portable.
"""
