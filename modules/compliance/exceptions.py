"""
Custom exceptions for compliance module.
"""


class ComplianceException(Exception):
    """Base exception for compliance module."""
    pass


class RulesConfigurationError(ComplianceException):
    """Exception raised when the rules configuration cannot be loaded."""
    pass


class SchemaStoreError(ComplianceException):
    """Exception raised when the custom schema cannot be persisted."""
    pass
