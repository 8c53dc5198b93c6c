# RepoSync Resource Parser
# Turn file content into a resource identity

import json
from dataclasses import dataclass, field
from typing import Any

import yaml

from reposync.resources.types import DASHBOARD_KIND, GroupVersionKind, ResourceError


@dataclass
class ParsedResource:
    """A resource read from a repository file."""

    name: str
    gvk: GroupVersionKind
    spec: dict[str, Any] = field(default_factory=dict)


def _load(path: str, data: bytes) -> Any:
    """Decode JSON or YAML content based on the file extension."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ResourceError(f"{path} is not valid utf-8: {e}")

    try:
        if path.lower().endswith(".json"):
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResourceError(f"unable to parse {path}: {e}")


def _split_api_version(api_version: str) -> tuple[str, str]:
    if "/" in api_version:
        group, version = api_version.split("/", 1)
        return group, version
    return "", api_version


def parse_resource(path: str, data: bytes) -> ParsedResource:
    """
    Parse a resource definition.

    Kubernetes style objects (apiVersion, kind, metadata.name) keep their
    identity. Classic dashboard JSON (uid plus title or panels, no kind)
    is read as a dashboard named by its uid.

    Args:
        path: Repository path, used for format detection and messages.
        data: Raw file content.

    Returns:
        ParsedResource.

    Raises:
        ResourceError: If the content is not a recognizable resource.
    """
    obj = _load(path, data)
    if not isinstance(obj, dict):
        raise ResourceError(f"{path} does not contain an object")

    if "kind" in obj and "apiVersion" in obj:
        metadata = obj.get("metadata") or {}
        name = metadata.get("name") if isinstance(metadata, dict) else None
        if not name:
            raise ResourceError(f"{path} is missing metadata.name")
        group, version = _split_api_version(str(obj["apiVersion"]))
        gvk = GroupVersionKind(group=group, version=version, kind=str(obj["kind"]))
        spec = obj.get("spec") or {}
        return ParsedResource(name=str(name), gvk=gvk, spec=spec if isinstance(spec, dict) else {})

    if "uid" in obj and ("title" in obj or "panels" in obj):
        if not obj["uid"]:
            raise ResourceError(f"{path} has an empty dashboard uid")
        return ParsedResource(name=str(obj["uid"]), gvk=DASHBOARD_KIND, spec=obj)

    raise ResourceError(f"{path} is not a supported resource")
