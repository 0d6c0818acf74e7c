import logging
import os
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from razorsnap.constants import RAZORSNAP_FILE_ENCODING

log = logging.getLogger(__name__)


def _create_yaml(preserve_comments: bool = False) -> YAML:
    """
    Creates a YAML that can load/save with comments if preserve_comments is True.
    """
    typ = None if preserve_comments else "safe"
    result = YAML(typ=typ)
    result.preserve_quotes = preserve_comments
    return result


def load_yaml(path: str, preserve_comments: bool = False) -> dict[str, Any]:
    """
    :param path: the path to the YAML file to load
    :param preserve_comments: whether to return a ruamel CommentedMap which retains the file's comments
    :return: the loaded mapping; an empty dict for an empty document
    """
    with open(path, encoding=RAZORSNAP_FILE_ENCODING) as f:
        data = _create_yaml(preserve_comments=preserve_comments).load(f)
    if data is None:
        return CommentedMap() if preserve_comments else {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}, got {type(data).__name__}")
    return data


def save_yaml(path: str, data: dict | CommentedMap, preserve_comments: bool = True) -> None:
    yaml = _create_yaml(preserve_comments)
    dirname = os.path.dirname(path)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    log.debug("Saving YAML to %s", path)
    with open(path, "w", encoding=RAZORSNAP_FILE_ENCODING) as f:
        yaml.dump(data, f)
