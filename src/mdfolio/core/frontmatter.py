"""Frontmatter extraction and validation for content files"""

import datetime
import logging
import re
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from mdfolio.core.models import StatsItem


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)


class FrontMatter(BaseModel):
    """Recognized frontmatter keys. Unknown keys are ignored."""
    model_config = ConfigDict(extra='ignore')

    id:       Optional[str] = None
    name:     Optional[str] = None
    year:     Optional[int] = None
    featured: Optional[bool] = None
    order:    Optional[float] = None
    iframe:   Optional[str] = None
    stats:    list[StatsItem] = []

    @field_validator('id', 'name', 'iframe', mode='before')
    @classmethod
    def _scalar_to_str(cls, v: Any) -> Any:
        """YAML turns `id: 2024` into an int; keep identifiers textual."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return _number_label(v)
        return v

    @field_validator('stats', mode='before')
    @classmethod
    def _normalize_stats(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept str | number | {label, href?} entries; invalid entries are skipped one by one."""
        if v is None:
            return []
        if not isinstance(v, list):
            v = [v]
        source = (info.context or {}).get('source', '<string>')
        items = []
        for entry in v:
            try:
                items.append(StatsItem.model_validate(_stats_entry(entry)))
            except ValidationError:
                logger.warning("Skipping invalid stats entry %r in %s", entry, source)
        return items


def _number_label(n: float) -> str:
    """Stringify a number the way it was written: 2024 -> '2024', 2.5 -> '2.5'."""
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def _stats_entry(entry: Any) -> Any:
    if isinstance(entry, bool):
        return {'label': str(entry).lower()}
    if isinstance(entry, (int, float)):
        return {'label': _number_label(entry)}
    if isinstance(entry, (datetime.date, datetime.datetime)):
        return {'label': entry.isoformat()}
    if isinstance(entry, str):
        return {'label': entry}
    if isinstance(entry, dict) and isinstance(entry.get('label'), (int, float)):
        return {**entry, 'label': _stats_entry(entry['label'])['label']}
    return entry


def split_frontmatter(text: str, source: str = '<string>') -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body). Missing or malformed headers yield an empty dict."""
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    body = text[m.end():]
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning("Ignoring invalid YAML frontmatter in %s: %s", source, e)
        return {}, body
    if not isinstance(fm, dict):
        logger.warning("Ignoring frontmatter in %s: expected a mapping, got %s", source, type(fm).__name__)
        return {}, body
    return fm, body


def load_frontmatter(data: dict[str, Any], source: str = '<string>') -> FrontMatter:
    """Validate raw frontmatter, dropping (and logging) any field that fails validation."""
    data = {k: v for k, v in data.items() if v is not None}
    try:
        return FrontMatter.model_validate(data, context={'source': source})
    except ValidationError as e:
        bad = {err['loc'][0] for err in e.errors() if err['loc']}
        for key in sorted(bad, key=str):
            logger.warning("Dropping invalid frontmatter field %r in %s", key, source)
        return FrontMatter.model_validate({k: v for k, v in data.items() if k not in bad}, context={'source': source})
