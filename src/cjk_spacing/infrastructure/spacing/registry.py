"""
排版规则注册表。

规则函数通过 ``@rule`` 装饰器注册；调用方按名称执行单条规则或规则链。
规则链（profile）定义在 YAML 文件中，文件修改时间变化后自动重新加载。
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

import yaml

from cjk_spacing.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RULES_CONFIG = Path(__file__).resolve().parent / "settings" / "spacing_rules.yml"

RuleSpec = Union[str, Dict[str, Any]]


class RuleCategory(Enum):
    """规则分类"""

    SPACING = "spacing"
    CONTENT = "content"


@dataclass
class SpacingRule:
    """已注册规则的元数据"""

    name: str
    category: RuleCategory
    func: Callable
    description: str
    signature: Optional[inspect.Signature] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if not callable(self.func):
            raise ValueError(f"Rule {self.name} must have a callable function")
        if self.signature is None:
            try:
                self.signature = inspect.signature(self.func)
            except (TypeError, ValueError):  # pragma: no cover - builtins only
                self.signature = None

    def accepted_kwargs(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """只保留规则函数签名中存在的关键字参数"""
        if self.signature is None:
            return {}

        params = self.signature.parameters
        if any(param.kind == inspect.Parameter.VAR_KEYWORD for param in params.values()):
            return dict(kwargs)
        return {key: value for key, value in kwargs.items() if key in params}


def parse_rule_spec(spec: RuleSpec) -> Tuple[str, Dict[str, Any]]:
    """规则配置项 -> (规则名, kwargs)。配置项可以是规则名或 ``{name, kwargs}`` 映射。"""
    if isinstance(spec, str):
        return spec, {}
    if isinstance(spec, dict):
        rule_name = spec.get("name")
        if not rule_name:
            raise ValueError("Rule specification missing 'name'")
        return rule_name, dict(spec.get("kwargs") or {})
    raise ValueError(f"Invalid rule specification {spec!r}. Expected string or mapping.")


class SpacingRegistry:
    """
    全局规则注册表（单例）

    保存所有已注册的规则，以及从 YAML 文件读取的规则链。
    """

    _instance: Optional["SpacingRegistry"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return

        self._rules: Dict[str, SpacingRule] = {}
        self._lock = RLock()
        self._config_path = DEFAULT_RULES_CONFIG
        self._config_mtime: Optional[float] = None
        self._profiles: Dict[str, List[RuleSpec]] = {}
        self._default_rules: List[RuleSpec] = []
        self._initialized = True

    # --- 规则注册 -----------------------------------------------------------------
    def register(self, rule: SpacingRule) -> None:
        if rule.name in self._rules:
            logger.warning("registry.rule_overridden", rule=rule.name)

        self._rules[rule.name] = rule
        logger.debug(
            "registry.rule_registered", rule=rule.name, category=rule.category.value
        )

    def get_rule(self, name: str) -> Optional[SpacingRule]:
        return self._rules.get(name)

    def list_all_rules(self) -> List[SpacingRule]:
        return list(self._rules.values())

    # --- 规则执行 -----------------------------------------------------------------
    def apply_rule(self, value: Any, rule_name: str, **kwargs: Any) -> Any:
        """执行单条规则；规则函数不接受的参数会被丢弃"""
        rule = self._rules.get(rule_name)
        if rule is None:
            raise ValueError(
                f"Spacing rule '{rule_name}' not registered. Available: {sorted(self._rules)}"
            )

        try:
            return rule.func(value, **rule.accepted_kwargs(kwargs))
        except Exception as exc:
            raise ValueError(f"Spacing rule '{rule_name}' failed: {exc}") from exc

    def apply_rules(
        self,
        value: Any,
        rule_specs: Sequence[RuleSpec],
        **common_kwargs: Any,
    ) -> Any:
        """
        按顺序执行规则链

        Args:
            value: 输入文本
            rule_specs: 规则名或 ``{"name": ..., "kwargs": {...}}`` 映射
            common_kwargs: 传给每条规则的参数，优先于规则自身配置的 kwargs
        """
        for spec in rule_specs or ():
            rule_name, rule_kwargs = parse_rule_spec(spec)
            value = self.apply_rule(value, rule_name, **{**rule_kwargs, **common_kwargs})
        return value

    # --- 规则链配置 ---------------------------------------------------------------
    def set_config_path(self, path: Optional[Path]) -> None:
        """切换规则链配置文件（None 表示内置文件），下次查询时重新读取"""
        with self._lock:
            self._config_path = Path(path) if path is not None else DEFAULT_RULES_CONFIG
            self._config_mtime = None

    def list_profiles(self) -> List[str]:
        self._load_profiles()
        return sorted(self._profiles)

    def get_profile_rules(self, profile: Optional[str] = None) -> List[RuleSpec]:
        """
        获取规则链

        ``None`` 返回 ``default_rules``；未定义的规则链抛出 ValueError。
        """
        self._load_profiles()
        if profile is None:
            return list(self._default_rules)

        if profile not in self._profiles:
            raise ValueError(
                f"Rule profile '{profile}' not found in {self._config_path}. "
                f"Available: {sorted(self._profiles)}"
            )
        return list(self._profiles[profile])

    def _load_profiles(self) -> None:
        with self._lock:
            path = self._config_path
            if not path.exists():
                logger.debug("registry.config_missing", path=str(path))
                self._profiles, self._default_rules = {}, []
                self._config_mtime = None
                return

            mtime = path.stat().st_mtime
            if mtime == self._config_mtime:
                return

            with path.open("r", encoding="utf-8") as handle:
                parsed = yaml.safe_load(handle) or {}

            self._profiles, self._default_rules = self._parse_profile_config(
                parsed, path.name
            )
            self._config_mtime = mtime
            logger.debug(
                "registry.config_loaded", path=str(path), profiles=len(self._profiles)
            )

    def _parse_profile_config(
        self, parsed: Any, source: str
    ) -> Tuple[Dict[str, List[RuleSpec]], List[RuleSpec]]:
        if not isinstance(parsed, dict):
            raise ValueError(f"{source} must contain a mapping")

        raw_profiles = parsed.get("profiles") or {}
        if not isinstance(raw_profiles, dict):
            raise ValueError(f"'profiles' section in {source} must be a mapping")

        profiles = {
            name: self._checked_specs(specs, f"profiles.{name}")
            for name, specs in raw_profiles.items()
        }
        default_rules = self._checked_specs(parsed.get("default_rules"), "default_rules")
        return profiles, default_rules

    def _checked_specs(self, specs: Any, label: str) -> List[RuleSpec]:
        """规则链必须是列表，且引用的规则都已注册"""
        if specs is None:
            return []
        if not isinstance(specs, list):
            raise ValueError(f"'{label}' must be a list of rule specs")

        for spec in specs:
            try:
                rule_name, _ = parse_rule_spec(spec)
            except ValueError as exc:
                raise ValueError(f"Invalid rule specification in '{label}': {exc}") from exc
            if rule_name not in self._rules:
                raise ValueError(
                    f"Rule '{rule_name}' referenced in '{label}' is not registered"
                )
        return list(specs)


registry = SpacingRegistry()


def rule(name: str, category: RuleCategory, description: str):
    """
    注册规则的装饰器

    Example:
        @rule(
            name="collapse_blank_lines",
            category=RuleCategory.CONTENT,
            description="合并连续空行",
        )
        def collapse_blank_lines(value):
            ...
    """

    def decorator(func: Callable) -> Callable:
        registry.register(
            SpacingRule(name=name, category=category, func=func, description=description)
        )
        return func

    return decorator
