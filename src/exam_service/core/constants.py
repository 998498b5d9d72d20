"""
Shared constants for question records and answer encoding.
"""

# Answer sheets encode an unanswered question as this value / character
UNANSWERED_VALUE = -1
UNANSWERED_CHAR = "*"

# Spreadsheet-style question rows carry up to four options
MAX_OPTIONS = 4
OPTION_LETTERS = ("A", "B", "C", "D")

# Negative marking
CORRECT_MARK = 1.0
WRONG_MARK = -0.25
UNANSWERED_MARK = 0.0

# Sub-questions without a usable order are numbered as the first child
DEFAULT_SUB_ORDER = 1

DEFAULT_MOBILE = "Not provided"
