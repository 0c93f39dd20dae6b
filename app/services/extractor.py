"""Candidate info extraction from resume text.

Extracts name, email, phone, location, skills, education and experience
using heuristics and regex patterns. Every extractor works on the full text
independently and falls back to an empty value when nothing matches, so
extraction never fails.
"""

import logging
import re

from app.models.schemas import ExtractedRecord
from app.services.sections import find_section
from app.services.vocabulary import KNOWN_CITIES, SKILL_CATALOGUE

logger = logging.getLogger(__name__)

MAX_SKILLS = 30
MAX_EDUCATION = 5
MAX_EXPERIENCE = 10

SKILL_SECTION_KEYWORDS = (
    "skills", "technical skills", "core competencies", "expertise",
    "technologies", "proficiencies",
)
EDUCATION_SECTION_KEYWORDS = ("education", "academic", "qualification")
EXPERIENCE_SECTION_KEYWORDS = (
    "experience", "work experience", "employment", "work history",
    "professional experience",
)

_HONORIFIC_RE = re.compile(r"^(?:Mr|Mrs|Ms|Dr|Prof)(?:\.\s*|\s+)", re.IGNORECASE)

_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PLACEHOLDER_DOMAINS = ("example.com", "domain.com")
_MIN_EMAIL_LENGTH = 6

# Most specific first; the generic 10-digit run is the last resort.
_PHONE_PATTERNS = (
    # International: +91 98765 43210, +1-234-567-8900
    re.compile(r"\+?\d{1,4}[-. \t]?\(?\d{1,4}\)?[-. \t]?\d{1,4}[-. \t]?\d{1,4}[-. \t]?\d{1,9}"),
    # North American: (123) 456-7890, 123.456.7890
    re.compile(r"\(?\d{3}\)?[-. \t]?\d{3}[-. \t]?\d{4}"),
    # Indian grouped: 98765-43210
    re.compile(r"\b\d{5}[-. \t]?\d{5}\b"),
    re.compile(r"\b\d{10}\b"),
)
_PHONE_DIGITS = range(10, 16)

_LOCATION_LABEL_PATTERNS = (
    re.compile(
        r"\b(?:Current Location|Location|City|Address|Based in|Residing in|Lives in)"
        r"[\s:]+([A-Za-z\s,.-]+?)(?:\n|$|[|•])",
        re.IGNORECASE,
    ),
    re.compile(
        r"\b(?:Current Location|Location|City|Address)[\s:]+([^|\n•]+?)(?:\n|$|[|•])",
        re.IGNORECASE,
    ),
)
_CITY_PATTERNS = tuple(
    (city, re.compile(rf"\b{re.escape(city)}\b", re.IGNORECASE))
    for city in KNOWN_CITIES
)
_CITY_CONTEXT_CHARS = 30
_CONTEXT_EDGE_CHARS = "•-* \t:|"
_MAX_CITY_CONTEXT = 60
# City names run to at most four words: "Salt Lake City, UT"
_CITY_STATE_RE = re.compile(r"\b[A-Z][a-z]+(?:[ \t][A-Z][a-z]+){0,3},[ \t]*[A-Z]{2}\b")
_MONTH_RE = re.compile(
    r"\b(?:January|February|March|April|May|June|July|August|September|October"
    r"|November|December)\b"
)
_EMAIL_TRAILER_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+[ \t|•]+([A-Za-z \t,.-]{3,50}?)[ \t]*(?:\n|$)")
_CONTACT_LINES = 10
_LETTER_RE = re.compile(r"[A-Za-z]")

_SKILL_PATTERNS = tuple(
    (skill, re.compile(rf"(?<!\w){re.escape(skill)}(?!\w)", re.IGNORECASE))
    for skill in SKILL_CATALOGUE
)
_BULLET_LINE_RE = re.compile(r"^[ \t]*[•\-*◦▪][ \t]*(.+)$", re.MULTILINE)
_BULLET_PREFIX_RE = re.compile(r"^[•\-*◦▪]\s*")
_TOKEN_SPLIT_RE = re.compile(r"[,;|]")
_SUBHEADER_LINE_RE = re.compile(r"^\s*(?:Education|Experience|Work|Employment)", re.IGNORECASE)
_LEADING_FILLER_RE = re.compile(r"^(?:and|or|the|a|an)\b", re.IGNORECASE)

_DEGREE_RE = re.compile(
    r"\b(?:Bachelor(?:'s|s)?|Master(?:'s|s)?|Ph\.?D\.?|Doctorate|B\.S\.|M\.S\.|B\.A\.|M\.A\."
    r"|B\.Tech|M\.Tech|MBA|BBA|Associate(?:'s)?)(?![A-Za-z])[^.\n]*",
    re.IGNORECASE,
)
_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_ONGOING_RE = re.compile(r"\b(?:present|current)\b", re.IGNORECASE)


def _extract_name(text: str) -> str:
    """Return the first non-blank line with any honorific prefix removed."""
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return _HONORIFIC_RE.sub("", stripped, count=1).strip()
    return ""


def _is_placeholder_email(email: str) -> bool:
    domain = email.rsplit("@", 1)[-1].lower()
    return any(domain == d or domain.endswith("." + d) for d in _PLACEHOLDER_DOMAINS)


def _extract_email(text: str) -> str:
    """Return the first plausible email address in document order, or ""."""
    for match in _EMAIL_PATTERN.finditer(text):
        email = match.group(0)
        if len(email) < _MIN_EMAIL_LENGTH or _is_placeholder_email(email):
            continue
        return email
    return ""


def _digit_count(value: str) -> int:
    return sum(c.isdigit() for c in value)


def _extract_phone(text: str) -> str:
    """Return the first phone number found by the most specific matching pattern.

    Patterns are tried in priority order. A pattern only counts as matching
    when one of its hits carries 10 to 15 digits; otherwise the next, more
    generic pattern is tried.
    """
    for pattern in _PHONE_PATTERNS:
        for match in pattern.finditer(text):
            candidate = match.group(0).strip()
            if _digit_count(candidate) in _PHONE_DIGITS:
                return candidate
    return ""


def _is_plausible_location(value: str, min_len: int = 3, max_len: int = 100) -> bool:
    return (
        min_len <= len(value) <= max_len
        and bool(_LETTER_RE.search(value))
        and "@" not in value
    )


def _location_from_label(text: str) -> str:
    for pattern in _LOCATION_LABEL_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        location = match.group(1).strip().rstrip(".,;").strip()
        if _is_plausible_location(location):
            return location
    return ""


def _line_window(text: str, start: int, end: int, width: int = _CITY_CONTEXT_CHARS) -> str:
    """Return text[start:end] widened by up to *width* chars each side, within its line."""
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    if line_end == -1:
        line_end = len(text)
    return text[max(line_start, start - width):min(line_end, end + width)]


def _location_from_gazetteer(text: str) -> str:
    # First city in KNOWN_CITIES order wins, not the first one in the text.
    for city, pattern in _CITY_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        context = _line_window(text, match.start(), match.end()).strip(_CONTEXT_EDGE_CHARS)
        if (
            not context
            or len(context) > _MAX_CITY_CONTEXT
            or "." in context
            or "experience" in context.lower()
        ):
            return city
        return context
    return ""


def _location_from_city_state(text: str) -> str:
    for match in _CITY_STATE_RE.finditer(text):
        candidate = match.group(0)
        if _MONTH_RE.search(candidate):
            continue
        return candidate
    return ""


def _location_from_contact_line(text: str) -> str:
    head = "\n".join(text.splitlines()[:_CONTACT_LINES])
    match = _EMAIL_TRAILER_RE.search(head)
    if match is None:
        return ""
    location = match.group(1).strip().rstrip(".,;|").strip()
    if _is_plausible_location(location, max_len=50):
        return location
    return ""


_LOCATION_STRATEGIES = (
    _location_from_label,
    _location_from_gazetteer,
    _location_from_city_state,
    _location_from_contact_line,
)


def _extract_location(text: str) -> str:
    """Return the candidate location using progressively looser heuristics.

    Strategies, each tried only when the previous one found nothing:
    an explicit label ("Location: ..."), a known-city lookup, a
    "City, ST" pattern, and finally text trailing an email address on one
    of the first lines.
    """
    for strategy in _LOCATION_STRATEGIES:
        location = strategy(text)
        if location:
            logger.debug("Location found by %s", strategy.__name__)
            return location
    return ""


def _catalogue_hits(text: str) -> list[str]:
    return [
        skill
        for skill, pattern in _SKILL_PATTERNS
        if _is_skill_token(skill) and pattern.search(text)
    ]


def _is_skill_token(token: str) -> bool:
    return 2 < len(token) < 50 and not token.isdigit()


def _extract_skills(text: str) -> tuple[str, ...]:
    """Collect skills from the skills section.

    Three additive passes run over the section: catalogue terms, bullet
    items and comma-separated lists. When there is no skills section, or it
    yields nothing, catalogue terms are matched against the whole document.
    """
    section = find_section(text, SKILL_SECTION_KEYWORDS)

    # dict keeps first-seen order and drops duplicates
    skills: dict[str, None] = {}

    if section:
        skills.update(dict.fromkeys(_catalogue_hits(section)))

        for bullet in _BULLET_LINE_RE.finditer(section):
            for token in _TOKEN_SPLIT_RE.split(bullet.group(1)):
                token = token.strip()
                if _is_skill_token(token):
                    skills[token] = None

        for line in section.split("\n"):
            if "," not in line or _SUBHEADER_LINE_RE.match(line):
                continue
            for token in line.split(","):
                cleaned = _BULLET_PREFIX_RE.sub("", token.strip())
                if _is_skill_token(cleaned) and not _LEADING_FILLER_RE.match(cleaned):
                    skills[cleaned] = None

    if not skills:
        skills.update(dict.fromkeys(_catalogue_hits(text)))

    return tuple(skills)[:MAX_SKILLS]


def _extract_education(text: str) -> tuple[str, ...]:
    """Return degree lines from the education section.

    Falls back to any dated line in the section when no degree name is found.
    """
    section = find_section(text, EDUCATION_SECTION_KEYWORDS)
    if not section:
        return ()

    education = [m.group(0).strip() for m in _DEGREE_RE.finditer(section)]

    if not education:
        education = [
            line.strip()
            for line in section.splitlines()
            if len(line.strip()) > 10 and _YEAR_RE.search(line)
        ]

    return tuple(education[:MAX_EDUCATION])


def _is_section_header(line: str) -> bool:
    """True for "Work History:" or a bare "Experience" heading line."""
    stripped = line.strip()
    return stripped.endswith(":") or stripped.lower() in EXPERIENCE_SECTION_KEYWORDS


def _extract_experience(text: str) -> tuple[str, ...]:
    """Group the experience section into entries.

    A line carrying a year or "present"/"current" opens a new entry; the
    lines after it are appended to that entry until the next dated line.
    """
    section = find_section(text, EXPERIENCE_SECTION_KEYWORDS)
    if not section:
        return ()

    lines = section.splitlines()
    if lines and _is_section_header(lines[0]):
        lines = lines[1:]

    entries: list[str] = []
    current = ""

    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue

        if _YEAR_RE.search(stripped) or _ONGOING_RE.search(stripped):
            if current:
                entries.append(current)
            current = stripped
        elif current and len(stripped) > 5:
            current = f"{current} {stripped}"
        elif not current and len(stripped) > 10:
            current = stripped

    if current:
        entries.append(current)

    return tuple(entries[:MAX_EXPERIENCE])


def extract_resume_data(text: str) -> ExtractedRecord:
    """Extract structured candidate information from resume text.

    Args:
        text: Plain text content of a resume. May be empty.

    Returns:
        An ExtractedRecord. Fields that could not be found hold their empty
        default ("" or an empty tuple).
    """
    text = text or ""

    record = ExtractedRecord(
        name=_extract_name(text),
        email=_extract_email(text),
        phone=_extract_phone(text),
        location=_extract_location(text),
        skills=_extract_skills(text),
        education=_extract_education(text),
        experience=_extract_experience(text),
    )

    logger.debug(
        "Extracted record: name=%r, email=%s, phone=%s, location=%r, "
        "%d skills, %d education, %d experience",
        record.name,
        bool(record.email),
        bool(record.phone),
        record.location,
        len(record.skills),
        len(record.education),
        len(record.experience),
    )
    return record
