# coding=utf-8
"""
Description:
FileName：summary.py
Notes: tabular view of the aggregated field paths, largest total size first.

"""
import logging

import pandas as pd

from protoprofile.profile.aggregator import SampleSet, SampleValues, aggregate

PATH_SEPARATOR = "/"
PATH_COLUMN = "path"
SUMMARY_COLUMNS = [PATH_COLUMN, *SampleValues._fields]


def build_summary(samples: SampleSet) -> pd.DataFrame:
    rows = [[PATH_SEPARATOR.join(field_path), *values] for field_path, values in aggregate(samples)]
    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    df = df.sort_values(by=["total_size", PATH_COLUMN], ascending=[False, True], kind="stable")
    return df.reset_index(drop=True)


def log_top_paths(df: pd.DataFrame, logger: logging.Logger, top_n: int):
    for row in df.head(top_n).to_dict("records"):
        logger.info(f"{row['total_size']:>12} bytes  x{row['count']:<8} {row[PATH_COLUMN]}")


def write_summary_csv(df: pd.DataFrame, path: str):
    df.to_csv(path, index=False)
