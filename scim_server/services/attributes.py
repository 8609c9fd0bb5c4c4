"""Проекция атрибутов ресурса по параметрам attributes / excludedAttributes"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from ..resources.streaming import dump_resource

# Атрибуты, которые возвращаются всегда (RFC 7643, returned "always")
REQUIRED_ATTRIBUTES = {"id", "schemas"}


def _split_path(path: str) -> List[str]:
    """Разбивает путь атрибута на имя и податрибут"""
    # urn:...:User:name.givenName -> name.givenName
    if ":" in path:
        path = path.rsplit(":", 1)[1]
    return path.split(".", 1)


def _find_key(data: Dict[str, Any], name: str) -> Optional[str]:
    """Ищет ключ без учета регистра"""
    lowered = name.lower()
    for key in data:
        if key.lower() == lowered:
            return key
    return None


def _include(source: Dict[str, Any], attributes: List[str]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key in source:
        if key in REQUIRED_ATTRIBUTES:
            result[key] = source[key]

    for path in attributes:
        parts = _split_path(path.strip())
        key = _find_key(source, parts[0])
        if key is None:
            continue

        value = source[key]
        if len(parts) == 1:
            result[key] = value
            continue

        if isinstance(value, list):
            # Многозначный атрибут: emails.value -> [{"value": ...}, ...]
            current = result.get(key)
            items = current if isinstance(current, list) and len(current) == len(value) else [{} for _ in value]
            for item, projected in zip(value, items):
                if isinstance(item, dict) and isinstance(projected, dict):
                    sub_key = _find_key(item, parts[1])
                    if sub_key is not None:
                        projected[sub_key] = item[sub_key]
            result[key] = items
            continue

        if not isinstance(value, dict):
            result[key] = value
            continue

        sub_key = _find_key(value, parts[1])
        if sub_key is not None:
            target = result.setdefault(key, {})
            if isinstance(target, dict):
                target[sub_key] = value[sub_key]

    return result


def _exclude(source: Dict[str, Any], excluded_attributes: List[str]) -> Dict[str, Any]:
    result = dict(source)
    for path in excluded_attributes:
        parts = _split_path(path.strip())
        key = _find_key(result, parts[0])
        # Никогда не исключаем обязательные атрибуты SCIM
        if key is None or key in REQUIRED_ATTRIBUTES:
            continue

        if len(parts) == 1:
            result.pop(key)
        elif isinstance(result[key], list):
            items = []
            for item in result[key]:
                if isinstance(item, dict):
                    item = dict(item)
                    sub_key = _find_key(item, parts[1])
                    if sub_key is not None:
                        item.pop(sub_key)
                items.append(item)
            result[key] = items
        elif isinstance(result[key], dict):
            nested = dict(result[key])
            sub_key = _find_key(nested, parts[1])
            if sub_key is not None:
                nested.pop(sub_key)
            result[key] = nested

    return result


def project_attributes(
    resource: Union[BaseModel, Dict[str, Any]],
    attributes: Optional[List[str]] = None,
    excluded_attributes: Optional[List[str]] = None
) -> Union[BaseModel, Dict[str, Any]]:
    """Фильтрует атрибуты ресурса согласно SCIM спецификации

    Если заданы оба списка, приоритет у attributes.
    """
    if not attributes and not excluded_attributes:
        return resource

    resource_dict = dump_resource(resource)

    if attributes:
        return _include(resource_dict, attributes)

    return _exclude(resource_dict, excluded_attributes or [])
