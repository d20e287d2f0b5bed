"""
csv_io.py
Persistence utilities for writing fair dice game summaries to CSV files.
"""

import os
import csv
from typing import Dict, List, Any

SUMMARY_HEADER = [
    "game_id", "game_index", "timestamp", "player", "human_first",
    "human_die", "house_die", "human_roll", "house_roll", "outcome",
]

def append_row_to_csv(row: Dict[str, Any], csv_path: str, header: List[str]):
    write_header = not os.path.exists(csv_path)
    with open(csv_path, "a", newline='', encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        if write_header:
            writer.writeheader()
        writer.writerow(row)

def append_rows_to_csv(rows: List[Dict[str, Any]], csv_path: str, header: List[str]):
    write_header = not os.path.exists(csv_path)
    with open(csv_path, "a", newline='', encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        if write_header:
            writer.writeheader()
        for row in rows:
            writer.writerow(row)

def get_summary_header():
    return SUMMARY_HEADER.copy()

def summary_row(result, game_id: str, game_index, timestamp: str, player: str) -> Dict[str, Any]:
    """Flatten a GameResult into a SUMMARY_HEADER row."""
    return {
        "game_id": game_id,
        "game_index": game_index,
        "timestamp": timestamp,
        "player": player,
        "human_first": result.human_first,
        "human_die": result.human_die.label,
        "house_die": result.house_die.label,
        "human_roll": result.human_roll,
        "house_roll": result.house_roll,
        "outcome": result.outcome.value,
    }
