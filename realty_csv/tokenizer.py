"""
Line tokenizer for project sheet exports.
Splits one CSV line into fields and rebuilds lines from fields.
"""

from typing import Iterable, List


def parse_line(line: str) -> List[str]:
    """
    Split a CSV line into trimmed fields.

    Commas inside double quotes do not split, and a doubled quote inside a
    quoted field is a literal quote. An unterminated quote runs to the end
    of the line as if it had been closed.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append(''.join(current).strip())
    return fields


def quote_field(value: str) -> str:
    """Quote a field for output if it holds a comma or a double quote."""
    if not value:
        return ''
    if ',' in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def join_fields(fields: Iterable[str]) -> str:
    return ','.join(quote_field(field) for field in fields)
