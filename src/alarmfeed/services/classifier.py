"""Show classification for podcast episodes.

Every episode of the feed belongs to one show. The feed carries no explicit
show field, so the show is derived from the media filename and the episode
title. Rules are evaluated in order and the first match wins; the rules
overlap in the filename space, so their order is significant.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from urllib.parse import unquote, urlsplit

from alarmfeed.core.models import Classification, PodcastRecord, ShowType

# Receives the lower-cased filename and the original-case title
Predicate = Callable[[str, str], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """A named predicate and the classification it assigns."""

    name: str
    predicate: Predicate
    show_type: ShowType
    with_music: bool

    def matches(self, filename: str, title: str) -> bool:
        return self.predicate(filename, title)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="bm-suffix",
        predicate=lambda f, t: f.endswith("bm.mp3"),
        show_type=ShowType.ALARM_SA_DASKOM_I_MLADJOM,
        with_music=False,
    ),
    ClassificationRule(
        name="ljudi-iz-podzemlja",
        predicate=lambda f, t: (
            "-ljp" in f or "2020-09-17-125_64" in f or "2020-09-17-124_64" in f
        ),
        show_type=ShowType.LJUDI_IZ_PODZEMLJA,
        with_music=False,
    ),
    ClassificationRule(
        name="na-ivici-ofsajda",
        predicate=lambda f, t: "-nio" in f,
        show_type=ShowType.NA_IVICI_OFSAJDA,
        with_music=False,
    ),
    ClassificationRule(
        name="rastrojavanje",
        predicate=lambda f, t: "rastrojavanje" in f,
        show_type=ShowType.RASTROJAVANJE,
        with_music=False,
    ),
    ClassificationRule(
        name="vecernja-skola-rokenrola",
        predicate=lambda f, t: "večernja_škola" in f or "vecernja_skola" in f,
        show_type=ShowType.VECERNJA_SKOLA_ROKENROLA,
        with_music=False,
    ),
    ClassificationRule(
        name="sportski-pozdrav",
        predicate=lambda f, t: "sportski_pozdrav" in f or "sportski pozdrav" in t.lower(),
        show_type=ShowType.SPORTSKI_POZDRAV,
        with_music=False,
    ),
    ClassificationRule(
        name="tople-ljucke-price",
        predicate=lambda f, t: "tople_ljucke_price" in f,
        show_type=ShowType.TOPLE_LJUCKE_PRICE,
        with_music=False,
    ),
    ClassificationRule(
        name="mozemo-samo-da-se-slikamo",
        predicate=lambda f, t: f.startswith("msdss"),
        show_type=ShowType.MOZEMO_SAMO_DA_SE_SLIKAMO,
        with_music=False,
    ),
    ClassificationRule(
        name="puna-usta-poezije",
        predicate=lambda f, t: f.startswith("pup") or "PUP" in t,
        show_type=ShowType.PUNA_USTA_POEZIJE,
        with_music=False,
    ),
    ClassificationRule(
        name="unutrasnja-emigracija",
        predicate=lambda f, t: (
            "unutrasnja_emigracija" in f or "unutrasnja_emigracija" in t.lower()
        ),
        show_type=ShowType.UNUTRASNJA_EMIGRACIJA,
        with_music=True,
    ),
)

DEFAULT_CLASSIFICATION = Classification(
    show_type=ShowType.ALARM_SA_DASKOM_I_MLADJOM,
    with_music=True,
)


def media_filename(podcast_url: str | None) -> str:
    """Return the lower-cased last path segment of a media URL.

    Query string and fragment are ignored; percent-escapes are decoded.

    Example:
        >>> media_filename("https://example.com/audio/Episode-BM.mp3?x=1")
        'episode-bm.mp3'
    """
    if not podcast_url:
        return ""
    try:
        path = urlsplit(podcast_url).path
    except ValueError:
        # Malformed netloc, e.g. an unbalanced IPv6 bracket
        path = podcast_url.split("?", 1)[0].split("#", 1)[0]
    return unquote(path.rsplit("/", 1)[-1]).lower()


def match_rule(filename: str, title: str) -> ClassificationRule | None:
    """Return the first rule matching the filename and title, if any."""
    for rule in RULES:
        if rule.matches(filename, title):
            return rule
    return None


def classify(podcast_url: str | None, title: str | None) -> Classification:
    """Classify an episode by its media URL and title.

    Args:
        podcast_url: The enclosure URL (or a bare filename).
        title: The episode title, in its original case.

    Returns:
        The show type and music flag. Episodes matching no rule get the
        default show with music.
    """
    rule = match_rule(media_filename(podcast_url), title or "")
    if rule is None:
        return DEFAULT_CLASSIFICATION
    return Classification(show_type=rule.show_type, with_music=rule.with_music)


def classify_record(record: PodcastRecord) -> PodcastRecord:
    """Return a copy of ``record`` with its show type and music flag assigned."""
    classification = classify(record.podcast_url, record.title)
    return replace(
        record,
        show_type=classification.show_type,
        with_music=classification.with_music,
    )
