"""
Snapshot Reader.

Parses the section-tagged text format into a RecommendationRequest:

    USER_PROFILE
    <n>  then n x "<tag> <value>"
    WORKS
    <n>  then n x "<id> <k> (k x <tag> <value>) <views> <time>"
    SIMILAR_USERS
    <n>  then n x "<id> <similarity> <m> (m x <work id>)"
    PARAMS
    <num_recommendations> <random_factor>
    METRICS_CONFIG
    <use_metrics 0/1> <weight_views> <weight_time> <weight_tags>
    FUSION                                  (optional)
    <content_weight> <collab_weight>

Sections are read in this order. Lines before a header are skipped,
values are whitespace-separated and may wrap across lines. Any missing
section or malformed value raises InputFormatError.

Example:
    >>> from workrec.io.reader import read_request
    >>> request = read_request('data/snapshot.txt')
"""

from typing import Collection, Deque, List, Optional, TextIO, Tuple, Union
from collections import deque
from pathlib import Path
import logging
import math

from workrec.models import (
    MetricsConfig,
    RecommendationRequest,
    SimilarUser,
    Tag,
    UserProfile,
    Work,
)

logger = logging.getLogger(__name__)

SECTION_USER_PROFILE = 'USER_PROFILE'
SECTION_WORKS = 'WORKS'
SECTION_SIMILAR_USERS = 'SIMILAR_USERS'
SECTION_PARAMS = 'PARAMS'
SECTION_METRICS_CONFIG = 'METRICS_CONFIG'
SECTION_FUSION = 'FUSION'


class InputFormatError(ValueError):
    """Malformed snapshot text."""


# ============================================================================
# Token Stream
# ============================================================================

class _TokenStream:
    """
    Line-aware token cursor.

    Values are consumed token by token across lines; header lookup
    resumes on the remainder of the current line, then scans whole lines.
    """

    def __init__(self, text: str):
        self.lines = text.splitlines()
        self.line_no = 0
        self.pending: Deque[str] = deque()

    def find_header(self, name: str) -> bool:
        if self.pending:
            remainder = ' '.join(self.pending)
            self.pending.clear()
            if remainder.strip() == name:
                return True

        while self.line_no < len(self.lines):
            line = self.lines[self.line_no]
            self.line_no += 1
            if line.strip() == name:
                return True
        return False

    def expect_header(self, name: str) -> None:
        if not self.find_header(name):
            raise InputFormatError(f"Missing section '{name}'")

    def next_token(self, section: str, what: str) -> str:
        while not self.pending:
            if self.line_no >= len(self.lines):
                raise InputFormatError(
                    f"{section}: unexpected end of input while reading {what}"
                )
            self.pending.extend(self.lines[self.line_no].split())
            self.line_no += 1
        return self.pending.popleft()

    def read_float(self, section: str, what: str) -> float:
        token = self.next_token(section, what)
        try:
            value = float(token)
        except ValueError:
            raise InputFormatError(
                f"{section}: expected number for {what}, got '{token}' (line {self.line_no})"
            ) from None
        if not math.isfinite(value):
            raise InputFormatError(
                f"{section}: {what} must be finite, got '{token}' (line {self.line_no})"
            )
        return value

    def read_int(self, section: str, what: str) -> int:
        token = self.next_token(section, what)
        try:
            return int(token)
        except ValueError:
            raise InputFormatError(
                f"{section}: expected integer for {what}, got '{token}' (line {self.line_no})"
            ) from None

    def read_count(self, section: str, what: str) -> int:
        count = self.read_int(section, what)
        if count < 0:
            raise InputFormatError(f"{section}: {what} must be >= 0, got {count}")
        return count


# ============================================================================
# Section Parsers
# ============================================================================

def _read_tags(stream: _TokenStream, section: str, owner: str, count: int) -> Tuple[Tag, ...]:
    tags: List[Tag] = []
    for i in range(count):
        name = stream.next_token(section, f"tag #{i + 1} name of {owner}")
        value = stream.read_float(section, f"tag '{name}' value of {owner}")
        tags.append(Tag(name, value))

    _warn_duplicate_tags(tags, owner)
    return tuple(tags)


def _warn_duplicate_tags(tags: Collection[Tag], owner: str) -> None:
    names = [tag.name for tag in tags]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        logger.warning(
            f"Duplicate tag names for {owner}: {duplicates}. "
            f"All entries count toward the norm; the user side matches on the first one"
        )


def _read_user_profile(stream: _TokenStream) -> UserProfile:
    section = SECTION_USER_PROFILE
    stream.expect_header(section)
    count = stream.read_count(section, "number of user tags")
    return UserProfile(tags=_read_tags(stream, section, "user profile", count))


def _read_works(stream: _TokenStream) -> Tuple[Work, ...]:
    section = SECTION_WORKS
    stream.expect_header(section)
    count = stream.read_count(section, "number of works")

    works: List[Work] = []
    seen_ids = set()
    for i in range(count):
        work_id = stream.next_token(section, f"id of work #{i + 1}")
        num_tags = stream.read_count(section, f"number of tags of work '{work_id}'")
        tags = _read_tags(stream, section, f"work '{work_id}'", num_tags)
        view_count = stream.read_float(section, f"view count of work '{work_id}'")
        interaction_time = stream.read_float(section, f"interaction time of work '{work_id}'")

        if work_id in seen_ids:
            raise InputFormatError(f"{section}: duplicate work id '{work_id}'")
        seen_ids.add(work_id)

        works.append(Work(work_id, tags, view_count, interaction_time))
    return tuple(works)


def _read_similar_users(stream: _TokenStream) -> Tuple[SimilarUser, ...]:
    section = SECTION_SIMILAR_USERS
    stream.expect_header(section)
    count = stream.read_count(section, "number of similar users")

    users: List[SimilarUser] = []
    for i in range(count):
        user_id = stream.next_token(section, f"id of similar user #{i + 1}")
        similarity = stream.read_float(section, f"similarity of user '{user_id}'")
        num_liked = stream.read_count(section, f"number of liked works of user '{user_id}'")
        liked = tuple(
            stream.next_token(section, f"liked work #{j + 1} of user '{user_id}'")
            for j in range(num_liked)
        )
        users.append(SimilarUser(user_id, similarity, liked))
    return tuple(users)


def _read_params(stream: _TokenStream) -> Tuple[int, float]:
    section = SECTION_PARAMS
    stream.expect_header(section)
    num_recommendations = stream.read_int(section, "number of recommendations")
    random_factor = stream.read_float(section, "random factor")
    return num_recommendations, random_factor


def _read_metrics_config(stream: _TokenStream) -> MetricsConfig:
    section = SECTION_METRICS_CONFIG
    stream.expect_header(section)
    use_metrics = stream.read_int(section, "use_metrics flag")
    weight_views = stream.read_float(section, "views weight")
    weight_time = stream.read_float(section, "time weight")
    weight_tags = stream.read_float(section, "tags weight")
    return MetricsConfig(
        use_metrics=use_metrics != 0,
        weight_views=weight_views,
        weight_time=weight_time,
        weight_tags=weight_tags
    )


def _read_fusion(stream: _TokenStream) -> Tuple[Optional[float], Optional[float]]:
    section = SECTION_FUSION
    if not stream.find_header(section):
        return None, None
    content_weight = stream.read_float(section, "content weight")
    collab_weight = stream.read_float(section, "collaborative weight")
    return content_weight, collab_weight


# ============================================================================
# Public API
# ============================================================================

def parse_request(text: str) -> RecommendationRequest:
    """
    Parse snapshot text into a RecommendationRequest.

    Args:
        text: Full snapshot in the section-tagged format

    Returns:
        RecommendationRequest

    Raises:
        InputFormatError: If a section is missing or a value is malformed
    """
    stream = _TokenStream(text)

    profile = _read_user_profile(stream)
    catalog = _read_works(stream)
    similar_users = _read_similar_users(stream)
    num_recommendations, random_factor = _read_params(stream)
    metrics_config = _read_metrics_config(stream)
    content_weight, collab_weight = _read_fusion(stream)

    logger.debug(
        f"Parsed snapshot: user_tags={len(profile.tags)}, works={len(catalog)}, "
        f"similar_users={len(similar_users)}, count={num_recommendations}, "
        f"random_factor={random_factor}"
    )

    return RecommendationRequest(
        profile=profile,
        catalog=catalog,
        similar_users=similar_users,
        metrics_config=metrics_config,
        num_recommendations=num_recommendations,
        random_factor=random_factor,
        content_weight=content_weight,
        collab_weight=collab_weight
    )


def read_request(source: Union[str, Path, TextIO]) -> RecommendationRequest:
    """
    Read and parse a snapshot from a file path or open text stream.

    Raises:
        OSError: If the path cannot be opened (missing, a directory, no permission)
        InputFormatError: If the content is malformed or not valid UTF-8
    """
    try:
        if hasattr(source, 'read'):
            text = source.read()
        else:
            with open(Path(source), 'r', encoding='utf-8') as f:
                text = f.read()
    except UnicodeDecodeError as e:
        raise InputFormatError(f"Snapshot is not valid UTF-8: {e}") from e
    return parse_request(text)
