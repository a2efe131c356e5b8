"""
csvline: parse a delimited text line from each pipeline record into fields.

A transform stage for record-processing pipelines. Each record's source
field is tokenized as one CSV line and the columns are merged into the
record under names taken from the record, from static configuration, or
generated (column1, column2, ...).
"""

__version__ = "0.1.0"
