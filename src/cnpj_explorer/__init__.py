"""Business-registry dashboard: load, normalize, filter and aggregate CNPJ spreadsheets."""

__version__ = "0.1.0"
