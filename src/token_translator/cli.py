"""Command-line interface for the token translator."""

import logging
import click
from pathlib import Path
from .storage import ProjectStore
from .translation_manager import TranslationManager
from .types import FilterMode, LANGUAGE_ORDER, ProcessingError

LANGUAGE_CODES = [language.value for language in LANGUAGE_ORDER]


def _manager(ctx: click.Context) -> TranslationManager:
    """Load the project store named on the command line."""
    store_path = ctx.obj["store"]
    try:
        store = ProjectStore.load(store_path)
    except ProcessingError as e:
        raise click.ClickException(str(e))
    return TranslationManager(store)


def _fail(message: str) -> None:
    click.echo(f"❌ {message}", err=True)
    raise SystemExit(1)


def _preview(value: str, limit: int = 60) -> str:
    return value if len(value) <= limit else value[:limit] + "…"


def _report_performance(ctx: click.Context, manager: TranslationManager) -> None:
    """Print profiler figures of the finished operations when running verbose."""
    if not ctx.obj.get("verbose"):
        return

    summary = manager.profiler.get_performance_summary()
    for operation in summary.get("operations", []):
        click.echo(f"📊 {operation['name']}: {operation['duration']:.3f}s, "
                   f"{operation['tokens']} tokens, peak memory {operation['memory_peak']:.1f} MB")


@click.group()
@click.version_option(version="1.0.0")
@click.option('--store', '-s', default='translations.project.json', envvar='TOKEN_TRANSLATOR_STORE',
              type=click.Path(path_type=Path), show_default=True,
              help='Project store file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx: click.Context, store: Path, verbose: bool):
    """Token Translator - Manage multilingual design-token translations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    ctx.ensure_object(dict)
    ctx.obj["store"] = store
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument('name')
@click.option('--force', is_flag=True, help='Overwrite an existing store')
@click.pass_context
def init(ctx: click.Context, name: str, force: bool):
    """Create an empty project store."""
    store_path: Path = ctx.obj["store"]
    if store_path.exists() and not force:
        _fail(f"{store_path} already exists (use --force to overwrite)")

    try:
        ProjectStore.create(store_path, name)
    except ProcessingError as e:
        _fail(str(e))
    click.echo(f"✅ Created project '{name}' in {store_path}")


@main.command()
@click.option('--az', 'az_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Azerbaijani token export')
@click.option('--en', 'en_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='English token export')
@click.option('--ru', 'ru_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Russian token export')
@click.pass_context
def upload(ctx: click.Context, az_file: Path, en_file: Path, ru_file: Path):
    """Flatten and merge per-language JSON exports into the project."""
    if not (az_file or en_file or ru_file):
        _fail("Supply at least one of --az, --en, --ru")

    manager = _manager(ctx)
    click.echo("Flattening JSON files...")
    result = manager.upload_files({"az": az_file, "en": en_file, "ru": ru_file})

    if result.success:
        click.echo(f"✅ Successfully uploaded {result.token_count} tokens "
                   f"({result.group_count} group extensions)")
        _report_performance(ctx, manager)
    else:
        click.echo("❌ Upload failed:", err=True)
        for error in result.errors or []:
            click.echo(f"   • {error}", err=True)
        raise SystemExit(1)


@main.command(name='list')
@click.option('--search', '-q', default='', help='Search keys or values')
@click.option('--filter', '-f', 'mode', default=FilterMode.ALL.value,
              type=click.Choice([mode.value for mode in FilterMode]), show_default=True,
              help='Show all tokens, only key issues, or only duplicates')
@click.pass_context
def list_tokens(ctx: click.Context, search: str, mode: str):
    """List tokens with their values."""
    manager = _manager(ctx)
    rows = manager.filter_rows(mode, search)
    issues = manager.key_issues()

    for row in rows:
        marker = " ⚠" if row.key_path in issues else ""
        click.echo(f"{row.key_path}{marker}")
        for language in LANGUAGE_ORDER:
            value = row.get_value(language)
            if value is not None:
                click.echo(f"    {language.value}: {_preview(value)}")

    click.echo(f"{len(rows)} of {len(manager.store)} tokens")


@main.command()
@click.pass_context
def lint(ctx: click.Context):
    """Report keys whose last segment should be renamed."""
    manager = _manager(ctx)
    issues = manager.key_issues()

    for key_path, issue in issues.items():
        click.echo(f"{key_path}: '{issue.original}' -> '{issue.suggested}' ({issue.key_path})")

    click.echo(f"Issues ({len(issues)})")


@main.command()
@click.argument('key_path', required=False)
@click.option('--all', 'fix_all', is_flag=True, help='Accept every suggested fix')
@click.pass_context
def fix(ctx: click.Context, key_path: str, fix_all: bool):
    """Accept the suggested rename for one key or for all keys."""
    if not key_path and not fix_all:
        _fail("Give a KEY_PATH or --all")

    manager = _manager(ctx)

    if fix_all:
        try:
            renamed, errors = manager.accept_all_fixes()
        except ProcessingError as e:
            _fail(str(e))
        click.echo(f"✅ Renamed {len(renamed)} tokens")
        for error in errors:
            click.echo(f"   • skipped: {error}", err=True)
        return

    try:
        row = manager.accept_fix(key_path)
    except ProcessingError as e:
        _fail(str(e))
    click.echo(f"✅ {row.original_key or key_path} -> {row.key_path}")


@main.command()
@click.option('--ignore', nargs=2, type=(click.Choice(LANGUAGE_CODES), str), default=None,
              metavar='LANG VALUE', help='Hide the duplicate group of LANG with VALUE')
@click.option('--all', 'show_all', is_flag=True, help='Include ignored groups')
@click.pass_context
def duplicates(ctx: click.Context, ignore, show_all: bool):
    """Report values repeated under different keys."""
    manager = _manager(ctx)

    if ignore:
        language, value = ignore
        try:
            manager.ignore_duplicate(language, value)
        except ProcessingError as e:
            _fail(str(e))
        click.echo(f"✅ Ignoring duplicates of {language.upper()}: \"{_preview(value)}\"")
        return

    groups = manager.duplicates(include_ignored=show_all)
    for group in groups:
        click.echo(f"{group.language.value.upper()}: \"{_preview(group.value, 80)}\" "
                   f"({len(group.key_paths)} keys)")
        for key_path in group.key_paths:
            click.echo(f"    {key_path}")

    click.echo(f"Duplicates ({len(groups)})")


@main.command()
@click.argument('key_path')
@click.argument('language', type=click.Choice(LANGUAGE_CODES))
@click.argument('value')
@click.pass_context
def edit(ctx: click.Context, key_path: str, language: str, value: str):
    """Set the value of a token in one language (empty clears it)."""
    manager = _manager(ctx)
    try:
        manager.edit_value(key_path, language, value)
    except ProcessingError as e:
        _fail(str(e))
    click.echo(f"✅ Updated {key_path} [{language}]")


@main.command()
@click.argument('key_path')
@click.argument('new_key_path')
@click.pass_context
def rename(ctx: click.Context, key_path: str, new_key_path: str):
    """Rename a token key."""
    manager = _manager(ctx)
    try:
        manager.rename(key_path, new_key_path)
    except ProcessingError as e:
        _fail(str(e))
    click.echo(f"✅ {key_path} -> {new_key_path}")


@main.command()
@click.argument('key_path')
@click.pass_context
def delete(ctx: click.Context, key_path: str):
    """Delete a token."""
    manager = _manager(ctx)
    try:
        manager.delete(key_path)
    except ProcessingError as e:
        _fail(str(e))
    click.echo(f"✅ Deleted {key_path}")


@main.command()
@click.argument('target', type=click.Choice(['developer', 'figma', 'all']))
@click.option('--lang', '-l', 'languages', multiple=True, type=click.Choice(LANGUAGE_CODES),
              help='Figma export language (repeatable; default: all)')
@click.option('--output', '-o', default='./output', show_default=True, help='Output directory')
@click.option('--stdout', 'to_stdout', is_flag=True, help='Print the document instead of writing it')
@click.pass_context
def export(ctx: click.Context, target: str, languages, output: str, to_stdout: bool):
    """Export the developer JSON and/or per-language Figma JSON."""
    manager = _manager(ctx)
    if len(manager.store) == 0:
        _fail("No translations to export. Upload JSON files first.")

    languages = languages or LANGUAGE_CODES

    if to_stdout:
        if target in ('developer', 'all'):
            click.echo(manager.render(manager.developer_document()))
        if target in ('figma', 'all'):
            for language in languages:
                click.echo(manager.render(manager.figma_document(language)))
        return

    results = []
    if target in ('developer', 'all'):
        results.append(manager.export_developer(output))
    if target in ('figma', 'all'):
        results.extend(manager.export_figma(language, output) for language in languages)

    failed = False
    for result in results:
        if result.success:
            click.echo(f"✅ Wrote {result.token_count} tokens to {result.output_path}")
        else:
            failed = True
            for error in result.errors or []:
                click.echo(f"❌ {error}", err=True)

    _report_performance(ctx, manager)

    if failed:
        raise SystemExit(1)


if __name__ == '__main__':
    main()
