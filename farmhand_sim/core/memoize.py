"""
Farmhand Sim — Memoization
Bounded result caches for the engine's pure calculators.

Caches are explicit objects. An engine owns a CacheRegistry and wraps the
functions it needs through it, so two engines (or two tests) never share
cached results.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
import functools
import inspect
import json
import logging

from ..config import CACHE, CacheConfig

logger = logging.getLogger(__name__)


def _code_key(code) -> dict:
    return {
        "code": code.co_code.hex(),
        "consts": [
            _code_key(const) if inspect.iscode(const) else _canonical(const)
            for const in code.co_consts
        ],
        "names": list(code.co_names),
    }


def _function_key(fn: Callable, _seen: Optional[set] = None) -> Any:
    """
    Structural key for a callable: its compiled code plus the values it closes over.

    Two lambdas written on the same line get different keys, and so do two
    closures built from the same code over different values.
    """
    if isinstance(fn, functools.partial):
        return {
            "partial": _function_key(fn.func, _seen),
            "args": _canonical(fn.args),
            "keywords": _canonical(fn.keywords),
        }

    code = getattr(fn, "__code__", None)
    if code is None:
        return f"{getattr(fn, '__module__', '')}.{getattr(fn, '__qualname__', repr(fn))}"

    seen = _seen if _seen is not None else set()
    if id(fn) in seen:
        # Self-referencing closure
        return f"<recursive {fn.__qualname__}>"
    seen.add(id(fn))

    closure = []
    for cell in getattr(fn, "__closure__", None) or ():
        try:
            contents = cell.cell_contents
        except ValueError:
            closure.append("<empty>")
            continue
        if callable(contents) and not isinstance(contents, type):
            closure.append(_function_key(contents, seen))
        else:
            closure.append(_canonical(contents))

    key = {
        "code": _code_key(code),
        "defaults": _canonical(getattr(fn, "__defaults__", None)),
        "closure": closure,
    }
    if inspect.ismethod(fn):
        key["self"] = _canonical(fn.__self__)
    return key


def _canonical(value: Any) -> Any:
    """Convert a value into a JSON-serializable, order-independent structure."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return f"{type(value).__name__}.{value.name}"
    if is_dataclass(value) and not isinstance(value, type):
        return [
            type(value).__qualname__,
            {f.name: _canonical(getattr(value, f.name)) for f in fields(value)},
        ]
    if isinstance(value, dict):
        pairs = [[_canonical(k), _canonical(v)] for k, v in value.items()]
        return {"__map__": sorted(pairs, key=lambda pair: json.dumps(pair[0]))}
    if isinstance(value, (set, frozenset)):
        return {"__set__": sorted((_canonical(v) for v in value), key=json.dumps)}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    if callable(value):
        return {"__fn__": _function_key(value)}
    return repr(value)


def serialize_args(args: tuple, kwargs: Optional[Dict[str, Any]] = None) -> str:
    """
    Build a cache key from call arguments.

    Callables are keyed by their compiled code and closed-over values rather
    than identity, so two different conditions passed to the same memoized
    function never collide.
    """
    payload = [_canonical(a) for a in args]
    if kwargs:
        payload.append({"__kwargs__": _canonical(kwargs)})
    return json.dumps(payload, sort_keys=True)


class MemoizeCache:
    """
    Key/value store that drops everything once it grows past a threshold.

    Clearing wholesale keeps bookkeeping O(1); the cost is a burst of misses
    right after a clear.
    """

    def __init__(self, clear_threshold: int = CACHE.clear_threshold):
        self.clear_threshold = clear_threshold
        self._store: Dict[str, Any] = {}
        self.clear_count = 0

    def __len__(self) -> int:
        return len(self._store)

    def has(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> Any:
        return self._store[key]

    def set(self, key: str, value: Any):
        if len(self._store) > self.clear_threshold:
            self.clear()
        self._store[key] = value

    def clear(self):
        logger.debug(f"Clearing memoize cache ({len(self._store)} entries)")
        self._store = {}
        self.clear_count += 1


class MemoizedFunction:
    """Callable wrapper that consults a MemoizeCache before calling through."""

    def __init__(
        self,
        fn: Callable,
        cache: MemoizeCache,
        serializer: Callable[[tuple, Dict[str, Any]], str] = serialize_args,
    ):
        functools.update_wrapper(self, fn)
        self.cache = cache
        self.serializer = serializer
        self.hits = 0
        self.misses = 0

    def __call__(self, *args, **kwargs):
        key = self.serializer(args, kwargs)
        if self.cache.has(key):
            self.hits += 1
            return self.cache.get(key)

        self.misses += 1
        result = self.__wrapped__(*args, **kwargs)
        self.cache.set(key, result)
        return result


def memoize(
    fn: Callable,
    cache: Optional[MemoizeCache] = None,
    serializer: Callable[[tuple, Dict[str, Any]], str] = serialize_args,
) -> MemoizedFunction:
    """Wrap a pure function with its own bounded cache."""
    return MemoizedFunction(fn, cache if cache is not None else MemoizeCache(), serializer)


class CacheRegistry:
    """
    Owns every memoize cache created for one engine/session.

    Each wrapped function gets its own cache.
    """

    def __init__(self, config: CacheConfig = CACHE):
        self.config = config
        self.functions: List[MemoizedFunction] = []

    def memoize(self, fn: Callable) -> MemoizedFunction:
        wrapped = memoize(fn, MemoizeCache(self.config.clear_threshold))
        self.functions.append(wrapped)
        return wrapped

    @property
    def caches(self) -> List[MemoizeCache]:
        return [f.cache for f in self.functions]

    def clear_all(self):
        for cache in self.caches:
            cache.clear()

    def get_status(self) -> dict:
        return {
            f.__name__: {"entries": len(f.cache), "hits": f.hits, "misses": f.misses,
                         "clears": f.cache.clear_count}
            for f in self.functions
        }
