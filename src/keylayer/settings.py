import dataclasses
import json
import pathlib
import typing

import cattrs

from .config_cache import ConfigCache, FailurePolicy
from .engine import LayoutTransformEngine

LAYOUT_FILENAME = "TextKeyboardLayout.json"

PUNCTUATION_MAPPING = {
    ",": "，",
    ".": "。",
    "?": "？",
    "!": "！",
    ":": "：",
    "'": "’",
    '"': "”",
    "~": "～",
    "(": "（",
    ")": "）",
}


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    layout_path: pathlib.Path
    keep_letters_uppercase: bool = False
    failure_policy: FailurePolicy = FailurePolicy.CACHE_UNTIL_MODIFIED
    strict_state: bool = False
    layout_from_overrides: bool = False
    punctuation_mapping: dict[str, str] = dataclasses.field(default_factory=dict)

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w", encoding="utf-8") as outfile:
            json.dump(raw, outfile, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open(encoding="utf-8") as infile:
            raw = json.load(infile)
        raw["_path"] = src
        raw.setdefault("layout_path", str(src.parent / "config" / LAYOUT_FILENAME))
        return settings_converter.structure(raw, cls)

    @classmethod
    def for_test(cls, layout_path: typing.Optional[pathlib.Path] = None):
        return settings_converter.structure(
            {
                "_path": "test.settings.json",
                "layout_path": str(layout_path) if layout_path is not None else f"config/{LAYOUT_FILENAME}",
                "keep_letters_uppercase": False,
                "failure_policy": "cache_until_modified",
                "strict_state": True,
                "layout_from_overrides": False,
                "punctuation_mapping": PUNCTUATION_MAPPING,
            },
            cls,
        )

    def make_cache(self) -> ConfigCache:
        return ConfigCache(self.layout_path, failure_policy=self.failure_policy)

    def make_engine(self, cache: typing.Optional[ConfigCache] = None) -> LayoutTransformEngine:
        return LayoutTransformEngine(
            cache if cache is not None else self.make_cache(),
            keep_letters_uppercase=self.keep_letters_uppercase,
            strict=self.strict_state,
            layout_from_rows=self.layout_from_overrides,
        )
