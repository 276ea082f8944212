"""
Core processing modules for the transaction dashboard.

This package contains:
- aggregate: Summary metrics and chart series
- config: Application configuration and settings
- exceptions: Custom exception classes
- logger: Logging configuration
- normalize: Row normalization into Transaction records
- reader: Spreadsheet decoding (.xls and .xlsx)
- schema: Pydantic models shared across the pipeline
- view: Type filtering and column sorting
"""
