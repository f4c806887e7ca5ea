import json
import re
from collections.abc import Iterable
from typing import Any

import yaml

try:
    YamlLoader = yaml.CSafeLoader
    YamlDumper = yaml.CSafeDumper
except AttributeError:
    YamlLoader = yaml.SafeLoader
    YamlDumper = yaml.SafeDumper


def strip_comments(s: str, tokens: Iterable[str]) -> str:
    """Cut ``s`` at the first occurrence of each token, in the given order."""
    for token in tokens:
        index = s.find(token)
        if index != -1:
            s = s[:index]
    return s


def split_by_first_sep(sep: str, s: str) -> tuple[str, str, str]:
    """
    Args:
        sep: literal separator
    Returns:
        (prefix, sep, suffix)
        If the separator is missing, returns (s, "", "")
    """
    parts = s.split(sep)
    if len(parts) == 1:
        return (s, "", "")
    return (parts[0], sep, sep.join(parts[1:]))


def yaml_dumps(data: Any) -> str:
    return yaml.dump(
        data,
        Dumper=YamlDumper,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )


def yaml_loads(yaml_str: str):
    return yaml.load(yaml_str, Loader=YamlLoader)


def json_dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=4)


_trim_pattern = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(s: str) -> str:
    """Strip surrounding whitespace, byte-order marks included."""
    return _trim_pattern.sub("", s)
