import sys

# Default set for the trim family.
WHITESPACE = " \t\r\n\v\f"

CR = "\r"
LF = "\n"
EOL_CHARS = CR + LF

NUL = "\0"

# Index that always clamps to the end of a view, e.g. `view.sub(3, END)`.
END = sys.maxsize
