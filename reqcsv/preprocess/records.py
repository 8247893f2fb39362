"""
Segment page text into (chapter, requirement, description) records.

Three strategies are available:

* `extract_records` - every chapter match is paired with every requirement
  match on the page, and descriptions are located by first-occurrence
  substring search. This is the long-standing output format and the default.
* `extract_scoped_records` - requirements are attached to the chapter whose
  region contains them, and descriptions are cut using the match offsets.
* `extract_requirement_numbers` - requirement identifiers only.

None of these raise on unusual text: missing or out-of-order identifiers
produce empty descriptions.
"""

import logging
from typing import List, Pattern

import pandas as pd
from pydantic import BaseModel, ConfigDict

from reqcsv import BASE_LOGGERNAME

LOGGER_NAME = f"{BASE_LOGGERNAME}.records"

logger = logging.getLogger(LOGGER_NAME)


class Record(BaseModel):
    """One extracted requirement row."""

    model_config = ConfigDict(frozen=True)

    chapter: str
    requirement: str
    description: str

    def as_row(self) -> List[str]:
        return [self.chapter, self.requirement, self.description]


def get_description_for_requirement(text: str, chapter: str, requirement: str) -> str:
    """
    Return the text following `requirement` up to the next `chapter`.

    Both identifiers are located by their first occurrence in `text`. The
    chapter search starts at the requirement's own position, so the end is
    the first chapter occurrence at or after the requirement, or the end of
    the text when there is none.

    Args:
        text: Page text.
        chapter: Chapter identifier.
        requirement: Requirement identifier.

    Returns:
        The trimmed description, or "" when either identifier is absent or
        the bounds are empty or inverted.

    Example:
        >>> get_description_for_requirement("1.1.1 Boot.\\n1.2 Next", "1.2", "1.1.1")
        'Boot.'
    """
    chapter_index = text.find(chapter)
    requirement_index = text.find(requirement)

    if chapter_index == -1 or requirement_index == -1:
        return ""

    start_index = requirement_index + len(requirement)
    end_index = text.find(chapter, requirement_index)
    if end_index == -1:
        end_index = len(text)

    return text[start_index:end_index].strip()


def extract_records(text: str, chapter_pattern: Pattern, requirement_pattern: Pattern) -> List[Record]:
    """
    Pair every chapter match with every requirement match on the page.

    A page with C chapter matches and R requirement matches yields C*R
    records, ordered by chapter match then requirement match. The
    requirement search always covers the whole page.
    """
    records = []
    for chapter_match in chapter_pattern.finditer(text):
        chapter = chapter_match.group(0)
        for requirement_match in requirement_pattern.finditer(text):
            requirement = requirement_match.group(0)
            description = get_description_for_requirement(text, chapter, requirement)
            records.append(Record(chapter=chapter, requirement=requirement, description=description))
    return records


def get_matches_df(text: str, pattern: Pattern) -> pd.DataFrame:
    """Build a DataFrame with the start, end and matched text of every match of `pattern`."""
    matches = [{"start": m.start(), "end": m.end(), "match": m.group(0)} for m in pattern.finditer(text)]
    return pd.DataFrame(matches, columns=["start", "end", "match"])


def add_region_bounds(
    df: pd.DataFrame,
    region_end: int,
    match_start_col: str = "start",
    match_end_col: str = "end",
    ) -> pd.DataFrame:
    """
    Add the text region owned by each match.

    A match owns the text from its own end up to the start of the next
    match; the last match owns everything up to `region_end`.
    """
    df = df.reset_index(drop=True).copy()
    df["region_start"] = df[match_end_col].astype(int)
    df["region_end"] = df[match_start_col].shift(-1).fillna(region_end).astype(int)
    return df


def extract_scoped_records(text: str, chapter_pattern: Pattern, requirement_pattern: Pattern) -> List[Record]:
    """
    Attach each requirement to the chapter whose region contains it.

    Descriptions run from the end of a requirement match to the start of the
    next requirement match in the same chapter, or to the end of the chapter
    region. Requirements before the first chapter are dropped. A chapter
    match starting where a requirement match starts (``1.1`` inside
    ``1.1.1``) belongs to the requirement and does not open a region.
    """
    requirements_df = get_matches_df(text, requirement_pattern)
    chapters_df = get_matches_df(text, chapter_pattern)
    chapters_df = chapters_df[~chapters_df["start"].isin(requirements_df["start"])]
    if chapters_df.empty or requirements_df.empty:
        return []

    chapters_df = add_region_bounds(chapters_df, len(text))
    leading = requirements_df[requirements_df["start"] < chapters_df["start"].iloc[0]]
    if not leading.empty:
        logger.debug(f"Dropping {len(leading)} requirement(s) before the first chapter")

    records = []
    for chapter in chapters_df.itertuples(index=False):
        in_region = requirements_df[
            (requirements_df["start"] >= chapter.region_start) & (requirements_df["start"] < chapter.region_end)
        ]
        in_region = add_region_bounds(in_region, chapter.region_end)
        for requirement in in_region.itertuples(index=False):
            description = text[requirement.region_start:requirement.region_end].strip()
            records.append(Record(chapter=chapter.match, requirement=requirement.match, description=description))
    return records


def extract_requirement_numbers(text: str, requirement_pattern: Pattern) -> List[str]:
    """
    Return the requirement identifiers on the page in text order.

    The first capture group is used when the pattern has one, otherwise the
    whole match.
    """
    group = 1 if requirement_pattern.groups else 0
    return [m.group(group) or "" for m in requirement_pattern.finditer(text)]
