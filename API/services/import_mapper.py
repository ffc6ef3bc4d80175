"""
Spreadsheet header mapper for customer imports.

ISP panel exports name their columns differently ("Total Bandwidth (Mbps)",
"Minor Area", "Expiration Date", ...). Each target field has a list of
header patterns: exact case-insensitive match first, then substring match.
"""

import csv
import io
from typing import Dict, List


FIELD_PATTERNS: Dict[str, List[str]] = {
    "username": ["Username", "user"],
    "full_name": ["Full Name", "name"],
    "status": ["Status"],
    "package": ["Package"],
    "bandwidth": ["Total Bandwidth (Mbps)", "bandwidth", "mb"],
    "expiry_date": ["Expiration Date", "expiry", "date"],
    "area": ["Minor Area", "area", "location"],
    "address": ["Address"],
    "mobile_number": ["Mobile", "Phone"],
}


def find_value(row: Dict[str, str], patterns: List[str]) -> str:
    keys = list(row.keys())
    for p in patterns:
        for k in keys:
            if k and k.strip().lower() == p.lower():
                return row[k] or ""
    for k in keys:
        if k and any(p.lower() in k.lower() for p in patterns):
            return row[k] or ""
    return ""


def map_row(row: Dict[str, str]) -> Dict[str, str]:
    """One raw spreadsheet row -> CustomerImportRow-shaped dict."""
    return {field: find_value(row, patterns).strip() for field, patterns in FIELD_PATTERNS.items()}


def parse_csv(content: bytes) -> List[Dict[str, str]]:
    """Decode a CSV upload and map every non-empty row."""
    text = content.decode("utf-8-sig", errors="replace")
    reader = csv.DictReader(io.StringIO(text))
    rows = []
    for raw in reader:
        if not any((v or "").strip() for v in raw.values() if isinstance(v, str)):
            continue
        rows.append(map_row(raw))
    return rows
