import re

SEPARATOR_CHARS = "()[]{}.,;:\"'?!"

SEPARATOR_PATTERN = re.compile(r"([\s" + re.escape(SEPARATOR_CHARS) + r"]+)")

LATIN_UPPER_PATTERN = re.compile(r"^[A-Z]")

FORMATTED_TEMPLATE = "{brand} ({generic})"

ENGLISH_IMPORT_COLUMNS = ["brand_name", "generic_name", "notes"]

ALIAS_IMPORT_COLUMNS = ["alias_term", "language", "english_brand", "generic_name", "notes"]
