# Reporting Package
from reporting.csv_export import circuit_export_rows, export_to_csv

__all__ = ["circuit_export_rows", "export_to_csv"]
