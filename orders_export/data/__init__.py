"""
Envelope parsing, column derivation, and CSV writing.

Handles turning the raw JSON body into a column-fixed record frame and
writing it to disk in the export's CSV format.
"""
