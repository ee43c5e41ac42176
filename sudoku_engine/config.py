from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")

class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__

def _wrap(value: Any) -> Any:
    if isinstance(value, dict):
        return DotDict({k: _wrap(v) for k, v in value.items()})
    return value

def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return _wrap(data)

def deep_merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in extra.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            deep_merge(base[k], v)
        else:
            base[k] = _wrap(v)
    return base

def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    # dotted keys reach into sections: merge_overrides(cfg, **{"animation.step_delay_ms": 50})
    for k, v in overrides.items():
        if v is None:
            continue
        node = cfg
        *parents, leaf = k.split(".")
        for p in parents:
            if not isinstance(node.get(p), dict):
                node[p] = DotDict()
            node = node[p]
        node[leaf] = _wrap(v)
    return cfg

def load_config(path: Optional[str | Path] = None, **overrides) -> DotDict:
    """Packaged defaults, then the optional user YAML file, then keyword overrides."""
    cfg = load_yaml(DEFAULTS_PATH)
    if path is not None:
        deep_merge(cfg, load_yaml(path))
    return merge_overrides(cfg, **overrides)
