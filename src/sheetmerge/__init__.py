"""SheetMerge: merge many spreadsheet files into one workbook."""

__version__ = "0.1.0"
