"""
API server package — HTTP interface for the dashboard frontend.

Serves the merged token list and source diagnostics; delegates all data work
to the scanner's TokenAggregator.
"""
