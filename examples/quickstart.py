"""Quickstart example for typedmessage.

Generates a typed catalog from a small locale directory, then resolves
messages through a LocaleController while switching locales.

Run with: python examples/quickstart.py
"""

import asyncio
import importlib.util
import json
import tempfile
from datetime import date
from pathlib import Path
from types import ModuleType

from typedmessage import (
    GeneratorOptions,
    LocaleController,
    MemoryLocaleStorage,
    MessageResolver,
    PathLocaleLoader,
    generate_message_file,
    message_provider,
    use_typed_message,
    use_typed_message_dynamic,
)

LOCALES = {
    "fallback.json": {
        "WELCOME": "Welcome",
        "GREETING": "Hello {name}, you have {count:number} new messages",
        "LAST_LOGIN": "Last login: {when:date}",
    },
    "en.json": {
        "WELCOME": "Welcome!",
        "GREETING": "Hi {name}, you have {count:number} new messages",
    },
    "ja.json5": """{
        // Japanese
        WELCOME: 'ようこそ',
        GREETING: '{name}さん、新着メッセージが{count:number}件あります',
        LAST_LOGIN: '最終ログイン: {when:date}',
    }""",
}


def write_project(root: Path) -> None:
    """Create a locale directory with three locale files."""
    locale_dir = root / "locale"
    locale_dir.mkdir()
    for filename, content in LOCALES.items():
        text = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False)
        (locale_dir / filename).write_text(text, encoding="utf-8")


def import_generated(path: Path) -> ModuleType:
    """Import the generated module from its file path."""
    spec = importlib.util.spec_from_file_location("generated_messages", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def example_1_generate(root: Path) -> ModuleType:
    """Example 1: Generate the typed catalog."""
    print("=" * 60)
    print("Example 1: Code Generation")
    print("=" * 60)

    result = generate_message_file(GeneratorOptions(), root)
    assert result is not None
    print(f"Wrote {result.output_path.relative_to(root)}")
    print(f"  messages: {result.key_count}")
    print(f"  locales:  {', '.join(result.locales)}")

    generated = import_generated(result.output_path)
    for identifier, item in generated.messages.items():
        print(f"  {identifier}: {item.fallback!r}")
    return generated


async def example_2_switch_locales(root: Path, generated: ModuleType) -> None:
    """Example 2: Resolve messages while switching locales."""
    print("\n" + "=" * 60)
    print("Example 2: Locale Controller")
    print("=" * 60)

    messages = generated.messages
    storage = MemoryLocaleStorage()
    controller = LocaleController(
        PathLocaleLoader(root / "locale"),
        locales=generated.locales,
        storage_key="app:locale",
        storage=storage,
        on_change=lambda state: print(f"  [state] {state.locale}: {state.status}"),
    )

    async with controller:
        resolver = MessageResolver(controller)
        print(resolver.get_message(messages.WELCOME))
        print(resolver.get_message(messages.GREETING, {"name": "Taro", "count": 3}))
        print(resolver.get_message(messages.LAST_LOGIN, {"when": date(2024, 1, 15)}))

        await controller.set_locale("en")
        print(resolver.get_message(messages.WELCOME))
        print(resolver.get_message(messages.LAST_LOGIN, {"when": date(2024, 1, 15)}))

        try:
            await controller.set_locale("de")
        except FileNotFoundError as e:
            print(f"  switch failed, still on '{controller.locale}': {e}")

    print(f"Persisted locale: {storage.get_item('app:locale')}")


def example_3_provider(generated: ModuleType) -> None:
    """Example 3: Context-bound lookups."""
    print("\n" + "=" * 60)
    print("Example 3: Message Provider")
    print("=" * 60)

    with message_provider({"WELCOME": "Bienvenue"}, locale="fr"):
        get_message = use_typed_message()
        print(get_message(generated.messages.WELCOME))
        dynamic = use_typed_message_dynamic()
        print(dynamic.get_message_dynamic("NOT_A_KEY"))


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        project_root = Path(tmp)
        write_project(project_root)
        catalog_module = example_1_generate(project_root)
        asyncio.run(example_2_switch_locales(project_root, catalog_module))
        example_3_provider(catalog_module)
