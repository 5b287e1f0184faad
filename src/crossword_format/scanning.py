"""Header scanning: split text into key/value pairs and key/lists."""

from typing import Dict, List, Optional, Tuple, Union

from .grammar import COMMENT_RE, HEADER_LINE_RE, LIST_ITEM_RE, PERMITTED_KEYS
from .models import Header, ParseError, Stage


def _error(code: str, message: str, line: Optional[int] = None) -> ParseError:
    return ParseError(code=code, message=message, stage=Stage.SCANNED, line=line)


def scan_header(text: str) -> Tuple[Header, List[ParseError]]:
    """
    Scan the text for the permitted keys, gathering list items under
    ``across`` and ``down`` without parsing them.

    Every problem is collected; a missing key is reported once for all
    missing keys after the scan.

    Returns a tuple of (header, errors).
    """
    errors: List[ParseError] = []
    found: Dict[str, Union[str, List[str]]] = {}
    current_list: Optional[List[str]] = None

    for i, raw_line in enumerate(text.split("\n")):
        line = raw_line.rstrip()
        if not line or COMMENT_RE.match(line):
            continue

        key_match = HEADER_LINE_RE.match(line)
        if key_match:
            key = key_match.group("key")
            value = key_match.group("value").strip()
            current_list = None

            if key not in PERMITTED_KEYS:
                errors.append(_error(
                    "UNRECOGNISED_KEY",
                    f"unrecognised key, '{key}', in line[{i}]='{line}'",
                    line=i,
                ))
            elif key in found:
                errors.append(_error(
                    "DUPLICATE_KEY",
                    f"duplicate key, {key}, found in line[{i}]='{line}'",
                    line=i,
                ))
            elif PERMITTED_KEYS[key] == "list":
                if value:
                    errors.append(_error(
                        "LIST_KEY_WITH_VALUE",
                        f"unexpected text found after list key in line[{i}]='{line}'",
                        line=i,
                    ))
                else:
                    current_list = []
                    found[key] = current_list
            else:
                found[key] = value
            continue

        if current_list is not None:
            item_match = LIST_ITEM_RE.match(line)
            if item_match:
                current_list.append(item_match.group("item"))
            else:
                errors.append(_error(
                    "INVALID_LIST_ITEM",
                    f"could not parse as list item: line[{i}]='{line}'",
                    line=i,
                ))
        else:
            errors.append(_error(
                "INVALID_LINE",
                f"could not parse line[{i}]='{line}': no key specified and cannot be a list item",
                line=i,
            ))

    missing = [key for key in PERMITTED_KEYS if key not in found]
    if missing:
        errors.append(_error("MISSING_KEYS", f"missing keys: {', '.join(missing)}"))

    return Header(**found), errors
