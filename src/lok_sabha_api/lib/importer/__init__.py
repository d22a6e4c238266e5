"""Importer library public API.

Provides chunked parsing of TCPD-style Lok Sabha result CSV files.
"""

from lok_sabha_api.lib.importer.parser import ResultRecord, coerce_record, parse_results_csv

__all__ = [
    "ResultRecord",
    "coerce_record",
    "parse_results_csv",
]
