import click
from pathlib import Path
from typing import Optional

from rich.markdown import Markdown
from rich.panel import Panel as RichPanel
from rich.table import Table

from . import __version__
from .comics import PanelBuilder
from .config import Config
from .constants import DEFAULT_CAST, PREDEFINED_CHARACTERS, resolve_cast
from .episodes import EpisodeGenerator, needs_auto_start
from .errors import FormValidationError, ZenithError
from .export import export_work
from .generation import ImageGenerationClient, TextGenerationClient
from .library import ComicLibrary, DraftLibrary, EpisodeLibrary
from .models import Comic, DraftBatch, Episode, Phase
from .store import CollectionStore, LocalStorage
from .utils.console import create_console, create_spinner
from .utils.logger import setup_logger


@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False), default='config.yaml',
              help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx: click.Context, config: str, verbose: bool):
    """Zenith Studio - turn textbook excerpts into medical drama comics and episodes."""
    ctx.ensure_object(dict)

    config_path = Path(config)
    if config_path.exists():
        ctx.obj['config'] = Config.from_yaml(config_path).with_env_credentials()
    else:
        ctx.obj['config'] = Config().with_env_credentials()
    cfg = ctx.obj['config']

    log_level = "DEBUG" if verbose else cfg.log_level
    logger = setup_logger(log_level, cfg.log_file)
    ctx.obj['logger'] = logger
    ctx.obj['console'] = create_console(cfg.ui)

    logger.debug(f"Zenith Studio v{__version__}")
    if config_path.exists():
        logger.debug(f"Config loaded from: {config_path}")


# ---------------------------------------------------------------------------
# Shared wiring
# ---------------------------------------------------------------------------
def _storage(ctx: click.Context) -> LocalStorage:
    return LocalStorage(ctx.obj['config'].storage.data_dir)


def _comics(ctx: click.Context) -> ComicLibrary:
    if 'comics' not in ctx.obj:
        key = ctx.obj['config'].storage.comics_key
        ctx.obj['comics'] = ComicLibrary(CollectionStore(_storage(ctx), key, Comic))
    return ctx.obj['comics']


def _episodes(ctx: click.Context) -> EpisodeLibrary:
    if 'episodes' not in ctx.obj:
        key = ctx.obj['config'].storage.episodes_key
        ctx.obj['episodes'] = EpisodeLibrary(CollectionStore(_storage(ctx), key, Episode))
    return ctx.obj['episodes']


def _drafts(ctx: click.Context) -> DraftLibrary:
    if 'drafts' not in ctx.obj:
        key = ctx.obj['config'].storage.drafts_key
        ctx.obj['drafts'] = DraftLibrary(CollectionStore(_storage(ctx), key, DraftBatch))
    return ctx.obj['drafts']


def _text_client(ctx: click.Context) -> TextGenerationClient:
    if 'text_client' not in ctx.obj:
        ctx.obj['text_client'] = TextGenerationClient(ctx.obj['config'].gemini)
    return ctx.obj['text_client']


def _panel_builder(ctx: click.Context) -> PanelBuilder:
    if 'panel_builder' not in ctx.obj:
        cfg = ctx.obj['config']
        images = ImageGenerationClient(cfg.image, api_key=cfg.gemini.api_key)
        ctx.obj['panel_builder'] = PanelBuilder(_text_client(ctx), images)
    return ctx.obj['panel_builder']


def _episode_generator(ctx: click.Context) -> EpisodeGenerator:
    if 'episode_generator' not in ctx.obj:
        cfg = ctx.obj['config']
        ctx.obj['episode_generator'] = EpisodeGenerator(_episodes(ctx), _text_client(ctx), cfg.episodes)
    return ctx.obj['episode_generator']


def _find(items, ref: str, what: str):
    """Resolve an id, a unique id prefix, or (for episodes) an episode number."""
    exact = [i for i in items if i.id == ref]
    if exact:
        return exact[0]
    if ref.isdigit():
        numbered = [i for i in items if getattr(i, 'episode_number', None) == int(ref)]
        if numbered:
            return numbered[0]
    matches = [i for i in items if i.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise click.ClickException(f"No {what} matches '{ref}'")
    raise click.ClickException(f"'{ref}' matches {len(matches)} {what}s; use more characters")


def _panel_at(panels, number: int, where: str = 'comic'):
    if not 1 <= number <= len(panels):
        raise click.ClickException(f"Panel {number} does not exist ({where} has {len(panels)})")
    return panels[number - 1]


class _PanelTarget:
    """The saved panels of a comic, or its pending drafts, plus how to write them back."""

    def __init__(self, ctx: click.Context, comic: Comic, draft: bool):
        self.ctx = ctx
        self.comic = comic
        self.batch = None
        if draft:
            self.batch = _drafts(ctx).get(comic.id)
            if self.batch is None:
                raise click.ClickException(f"'{comic.topic}' has no draft panels")

    @property
    def panels(self):
        return self.batch.panels if self.batch is not None else self.comic.panels

    def panel(self, number: int):
        return _panel_at(self.panels, number, 'draft batch' if self.batch is not None else 'comic')

    def save(self, panel):
        try:
            panels = PanelBuilder.update_draft(self.panels, panel)
        except FormValidationError as e:
            raise click.ClickException(str(e))
        if self.batch is not None:
            self.batch = _drafts(self.ctx).replace_panels(self.batch, panels)
        else:
            self.comic = _comics(self.ctx).update(self.comic.model_copy(update={"panels": panels}))
        return panel


def _read_text(text: Optional[str], file: Optional[str], what: str) -> str:
    if file:
        return Path(file).read_text(encoding='utf-8')
    if text:
        return text
    raise click.ClickException(f"Provide the {what} as text or with a file")


def _run(ctx: click.Context, description: str, func, *args, on_cancel=None):
    """Run a generation call behind a spinner and turn errors into CLI errors.

    Ctrl-C tells ``on_cancel`` that the pending result is no longer wanted.
    """
    console = ctx.obj['console']
    logger = ctx.obj['logger']
    try:
        with create_spinner(console) as progress:
            progress.add_task(description, total=None)
            return func(*args)
    except KeyboardInterrupt:
        logger.warning(f"{description} interrupted")
        if on_cancel is not None:
            on_cancel()
        raise click.Abort()
    except FormValidationError as e:
        raise click.ClickException(str(e))
    except ZenithError as e:
        logger.error(f"{description} failed: {e}")
        raise click.ClickException(str(e))


def _show_panel(console, number: int, panel, title: Optional[str] = None):
    body = [f"[label]Visual:[/] {panel.visual_description}"]
    if panel.caption:
        body.append(f"[label]Caption:[/] {panel.caption}")
    for i, d in enumerate(panel.dialogue, 1):
        body.append(f'[muted]{i}.[/] [label]{d.character}:[/] "{d.line}"')
    body.append(f"[muted]Observation: {panel.observation}[/]")
    body.append(f"[muted]Reasoning: {panel.reasoning}[/]")
    body.append(f"[muted]Action: {panel.action}[/]")
    body.append(f"[muted]Expectation: {panel.expectation}[/]")
    body.append(f"[muted]Suggestions: {panel.suggestions}[/]")
    if panel.image_data:
        body.append(f"[ok]Image attached ({panel.image_mime_type})[/]")
    console.print(RichPanel("\n".join(body), title=title or f"Panel {number}", title_align="left"))


@cli.command('init-config')
@click.argument('path', type=click.Path(dir_okay=False), default='config.yaml')
@click.option('--dark', is_flag=True, help='Use the dark console theme')
@click.pass_context
def init_config(ctx: click.Context, path: str, dark: bool):
    """Write a default configuration file."""
    config = Config()
    config.ui.dark_mode = dark
    config.to_yaml(Path(path))
    ctx.obj['logger'].success(f"Configuration written to {path}")


@cli.command()
@click.argument('collection', type=click.Choice(['comics', 'episodes']))
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def clear(ctx: click.Context, collection: str, yes: bool):
    """Delete every comic or every episode."""
    if not yes:
        click.confirm(f"Delete ALL {collection}? This cannot be undone", abort=True)
    if collection == 'comics':
        _comics(ctx).clear()
        _drafts(ctx).clear()
    else:
        _episodes(ctx).clear()
    ctx.obj['logger'].success(f"Cleared all {collection}")


# ---------------------------------------------------------------------------
# Comic Builder
# ---------------------------------------------------------------------------
@cli.group()
def comic():
    """Build a comic excerpt by excerpt."""


@comic.command('cast')
@click.pass_context
def comic_cast(ctx: click.Context):
    """List the predefined characters."""
    table = Table(title="Zenith Teaching Hospital")
    table.add_column("Name", style="label")
    table.add_column("Role")
    for c in PREDEFINED_CHARACTERS:
        table.add_row(c.name, c.description)
    ctx.obj['console'].print(table)


@comic.command('new')
@click.option('--subject', '-s', required=True, help='Subject, e.g. Paediatrics')
@click.option('--topic', '-t', required=True, help='Topic of the comic')
@click.option('--ward', '-w', required=True, help='Ward where the story is set')
@click.option('--character', '-C', 'characters', multiple=True, help='Predefined character name')
@click.option('--custom', multiple=True, help='Custom character as "Name=Description"')
@click.option('--excerpt', '-e', help='Initial excerpt text')
@click.option('--excerpt-file', type=click.Path(exists=True, dir_okay=False), help='Initial excerpt file')
@click.pass_context
def comic_new(ctx, subject, topic, ward, characters, custom, excerpt, excerpt_file):
    """Start a new comic."""
    custom_pairs = []
    for item in custom:
        name, _, desc = item.partition('=')
        custom_pairs.append((name.strip(), desc.strip()))
    cast = resolve_cast(characters, custom_pairs) if (characters or custom_pairs) else list(DEFAULT_CAST)
    initial = _read_text(excerpt, excerpt_file, 'initial excerpt')

    try:
        created = _comics(ctx).create(subject, topic, ward, cast, initial)
    except FormValidationError as e:
        raise click.ClickException(str(e))
    ctx.obj['console'].print(f"[ok]Created comic[/] [title]{created.topic}[/] [muted]{created.id}[/]")


@comic.command('list')
@click.pass_context
def comic_list(ctx: click.Context):
    """List saved comics."""
    comics = _comics(ctx).items
    console = ctx.obj['console']
    if not comics:
        console.print("[muted]No comics yet. Start one with 'zenith comic new'.[/]")
        return
    table = Table()
    table.add_column("ID", style="muted")
    table.add_column("Topic", style="title")
    table.add_column("Subject")
    table.add_column("Ward")
    table.add_column("Panels", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("Created")
    for c in comics:
        table.add_row(
            c.id[:8], c.topic, c.subject, c.ward, str(len(c.panels)),
            f"{c.progress}%", c.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


@comic.command('show')
@click.argument('ref')
@click.pass_context
def comic_show(ctx: click.Context, ref: str):
    """Show a comic and its panels."""
    c = _find(_comics(ctx).items, ref, 'comic')
    console = ctx.obj['console']
    console.print(f"[title]{c.topic}[/]")
    console.print(f"[label]Subject:[/] {c.subject}  [label]Ward:[/] {c.ward}  [label]Progress:[/] {c.progress}%")
    console.print(f"[label]Characters:[/] {', '.join(ch.name for ch in c.characters)}")
    console.print(f"[label]Story context:[/] [muted]\"{c.story_state.last_panel_summary}\"[/]")
    for number, panel in enumerate(c.panels, 1):
        _show_panel(console, number, panel)


@comic.command('excerpt')
@click.argument('ref')
@click.option('--text', '-t', help='Excerpt text')
@click.option('--file', '-f', 'file', type=click.Path(exists=True, dir_okay=False), help='Excerpt file')
@click.option('--yes', is_flag=True, help='Save the generated panels without asking')
@click.pass_context
def comic_excerpt(ctx, ref, text, file, yes):
    """Generate draft panels for the next excerpt.

    Drafts are kept until they are finished or discarded, so they can be
    edited first with --draft on edit, dialogue, regenerate and image.
    """
    c = _find(_comics(ctx).items, ref, 'comic')
    drafts = _drafts(ctx)
    if drafts.get(c.id) is not None:
        raise click.ClickException(
            f"'{c.topic}' already has draft panels. Finish or discard them first."
        )
    excerpt = _read_text(text, file, 'excerpt')
    builder = _panel_builder(ctx)

    panels = _run(ctx, "AI is crafting your story...", builder.generate_panels, c, excerpt)
    drafts.put(DraftBatch(id=c.id, excerpt=excerpt, panels=panels))
    _show_drafts(ctx.obj['console'], panels)

    if not yes and not click.confirm("Finish excerpt & save panels?", default=True):
        ctx.obj['console'].print(
            f"[muted]Drafts kept. Edit them with --draft, then run 'zenith comic finish {c.id[:8]}'.[/]"
        )
        return
    _finish(ctx, c)


def _show_drafts(console, panels):
    for number, panel in enumerate(panels, 1):
        _show_panel(console, number, panel, title=f"Draft {number}")


def _finish(ctx: click.Context, c: Comic):
    batch = _drafts(ctx).get(c.id)
    if batch is None:
        raise click.ClickException(f"'{c.topic}' has no draft panels")
    try:
        updated = _panel_builder(ctx).finish_excerpt(c, batch.panels)
    except FormValidationError as e:
        raise click.ClickException(f"{e} The drafts were kept.")
    _comics(ctx).update(updated)
    _drafts(ctx).delete(c.id)
    ctx.obj['logger'].success(f"Saved {len(batch.panels)} panel(s); progress {updated.progress}%")


@comic.command('drafts')
@click.argument('ref')
@click.pass_context
def comic_drafts(ctx, ref):
    """Show a comic's pending draft panels."""
    c = _find(_comics(ctx).items, ref, 'comic')
    target = _PanelTarget(ctx, c, draft=True)
    _show_drafts(ctx.obj['console'], target.panels)


@comic.command('finish')
@click.argument('ref')
@click.pass_context
def comic_finish(ctx, ref):
    """Commit the pending draft panels to the comic."""
    _finish(ctx, _find(_comics(ctx).items, ref, 'comic'))


@comic.command('discard')
@click.argument('ref')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def comic_discard(ctx, ref, yes):
    """Throw away the pending draft panels."""
    c = _find(_comics(ctx).items, ref, 'comic')
    _PanelTarget(ctx, c, draft=True)
    if not yes:
        click.confirm(f"Discard the draft panels of '{c.topic}'?", abort=True)
    _drafts(ctx).delete(c.id)
    ctx.obj['logger'].success("Draft panels discarded")


draft_option = click.option('--draft', is_flag=True, help='Act on the pending draft panels')


@comic.command('edit')
@click.argument('ref')
@click.argument('panel_number', type=int)
@click.argument('field')
@click.argument('value')
@draft_option
@click.pass_context
def comic_edit(ctx, ref, panel_number, field, value, draft):
    """Set one text field of a panel by hand (e.g. visualDescription)."""
    target = _PanelTarget(ctx, _find(_comics(ctx).items, ref, 'comic'), draft)
    try:
        updated = PanelBuilder.edit_field(target.panel(panel_number), field, value)
    except FormValidationError as e:
        raise click.ClickException(str(e))
    _show_panel(ctx.obj['console'], panel_number, target.save(updated))


@comic.command('dialogue')
@click.argument('ref')
@click.argument('panel_number', type=int)
@click.option('--add', 'add', help='Add a line as "Character: line"')
@click.option('--remove', 'remove', type=int, help='Remove the Nth dialogue line')
@draft_option
@click.pass_context
def comic_dialogue(ctx, ref, panel_number, add, remove, draft):
    """Add or remove a panel's dialogue lines."""
    if (add is None) == (remove is None):
        raise click.UsageError("Give exactly one of --add or --remove")
    target = _PanelTarget(ctx, _find(_comics(ctx).items, ref, 'comic'), draft)
    panel = target.panel(panel_number)
    try:
        if add is not None:
            character, _, line = add.partition(':')
            updated = PanelBuilder.add_dialogue(panel, character, line)
        else:
            updated = PanelBuilder.remove_dialogue(panel, remove)
    except FormValidationError as e:
        raise click.ClickException(str(e))
    _show_panel(ctx.obj['console'], panel_number, target.save(updated))


@comic.command('regenerate')
@click.argument('ref')
@click.argument('panel_number', type=int)
@click.argument('field')
@draft_option
@click.pass_context
def comic_regenerate(ctx, ref, panel_number, field, draft):
    """Ask the AI to rewrite one field of a panel."""
    target = _PanelTarget(ctx, _find(_comics(ctx).items, ref, 'comic'), draft)
    panel = target.panel(panel_number)
    updated = _run(ctx, f"Regenerating {field}...", _panel_builder(ctx).regenerate_field,
                   target.comic, panel, field)
    _show_panel(ctx.obj['console'], panel_number, target.save(updated))


@comic.command('style-guide')
@click.argument('ref')
@click.pass_context
def comic_style_guide(ctx, ref):
    """Generate the visual style guide used as a prefix for image prompts."""
    library = _comics(ctx)
    c = _find(library.items, ref, 'comic')
    updated = _run(ctx, "Writing style guide...", _panel_builder(ctx).generate_style_guide, c)
    library.update(updated)
    ctx.obj['console'].print(RichPanel(updated.style_guide_prompt, title="Style guide"))


@comic.command('image')
@click.argument('ref')
@click.argument('panel_number', type=int)
@click.option('--edit', 'instruction', help='Edit the existing image with this instruction')
@draft_option
@click.pass_context
def comic_image(ctx, ref, panel_number, instruction, draft):
    """Generate (or edit) the image for a panel."""
    target = _PanelTarget(ctx, _find(_comics(ctx).items, ref, 'comic'), draft)
    panel = target.panel(panel_number)
    builder = _panel_builder(ctx)
    if instruction:
        updated = _run(ctx, "Editing image...", builder.edit_panel_image, panel, instruction)
    else:
        updated = _run(ctx, "Generating image...", builder.render_panel, target.comic, panel)
    if updated is None:
        raise click.ClickException("The image service did not return an image. Try again.")
    target.save(updated)
    ctx.obj['logger'].success(f"Image saved for panel {panel_number}")


@comic.command('export')
@click.argument('ref')
@click.option('--format', '-f', 'fmt', type=click.Choice(['md', 'json']), default='md')
@click.option('--output', '-o', type=click.Path(file_okay=False), default='exports')
@click.pass_context
def comic_export(ctx, ref, fmt, output):
    """Export a comic as Markdown or JSON."""
    c = _find(_comics(ctx).items, ref, 'comic')
    path = export_work(c, fmt, Path(output))
    click.echo(str(path))


@comic.command('delete')
@click.argument('ref')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def comic_delete(ctx, ref, yes):
    """Delete a comic."""
    library = _comics(ctx)
    c = _find(library.items, ref, 'comic')
    if not yes:
        click.confirm(f"Delete '{c.topic}'?", abort=True)
    library.delete(c.id)
    if _drafts(ctx).get(c.id) is not None:
        _drafts(ctx).delete(c.id)
    ctx.obj['logger'].success(f"Deleted '{c.topic}'")


# ---------------------------------------------------------------------------
# Episode Builder
# ---------------------------------------------------------------------------
@cli.group()
def episode():
    """Write serialized episodes phase by phase."""


def _show_episode(console, ep: Episode):
    console.print(
        f"[title]Episode {ep.episode_number}: {ep.topic}[/]  [phase]{ep.generation_phase.value}[/]"
    )
    if ep.error:
        console.print(f"[error]{ep.error}[/]")
    latest = {
        Phase.ARC_PROPOSAL_REVIEW: ep.story_arc_proposal,
        Phase.EPISODE_REVIEW: ep.full_episode_script,
        Phase.PANEL_BREAKDOWN_REVIEW: ep.panel_breakdown,
    }.get(ep.generation_phase)
    if latest:
        console.print(Markdown(latest))
    if ep.generation_phase is Phase.ARC_PROPOSAL_REVIEW:
        console.print("[muted]Reply to approve or modify the arc: zenith episode respond <id> \"...\"[/]")
    elif ep.generation_phase is Phase.EPISODE_REVIEW:
        if ep.character_database_update:
            console.print(Markdown(ep.character_database_update))
        console.print("[muted]Reply \"Generate panels\" when ready.[/]")
    elif ep.generation_phase is Phase.PANEL_BREAKDOWN_REVIEW:
        console.print("[muted]Mark finished with: zenith episode complete <id>[/]")


@episode.command('new')
@click.option('--topic', '-t', required=True, help='Medical topic of the episode')
@click.option('--content', help='Textbook content')
@click.option('--content-file', type=click.Path(exists=True, dir_okay=False), help='Textbook content file')
@click.option('--no-start', is_flag=True, help='Create the episode without requesting the arc proposal')
@click.pass_context
def episode_new(ctx, topic, content, content_file, no_start):
    """Create an episode and request its story arc proposal."""
    textbook = _read_text(content, content_file, 'textbook content')
    try:
        ep = _episodes(ctx).create(topic, textbook)
    except FormValidationError as e:
        raise click.ClickException(str(e))
    if not no_start:
        generator = _episode_generator(ctx)
        ep = _run(ctx, "Drafting story arc proposal...", generator.auto_start, ep,
                  on_cancel=generator.cancel)
    _show_episode(ctx.obj['console'], ep)


@episode.command('list')
@click.pass_context
def episode_list(ctx):
    """List saved episodes."""
    episodes = _episodes(ctx).items
    console = ctx.obj['console']
    if not episodes:
        console.print("[muted]No episodes yet. Start one with 'zenith episode new'.[/]")
        return
    table = Table()
    table.add_column("#", justify="right")
    table.add_column("ID", style="muted")
    table.add_column("Topic", style="title")
    table.add_column("Phase", style="phase")
    table.add_column("Turns", justify="right")
    table.add_column("Created")
    for ep in episodes:
        table.add_row(
            str(ep.episode_number), ep.id[:8], ep.topic, ep.generation_phase.value,
            str(len(ep.history)), ep.created_at.strftime("%Y-%m-%d"),
        )
    console.print(table)


@episode.command('show')
@click.argument('ref')
@click.pass_context
def episode_show(ctx, ref):
    """Show an episode's current output."""
    _show_episode(ctx.obj['console'], _find(_episodes(ctx).items, ref, 'episode'))


@episode.command('respond')
@click.argument('ref')
@click.argument('message')
@click.pass_context
def episode_respond(ctx, ref, message):
    """Reply to the current checkpoint (approve the arc, or "Generate panels")."""
    ep = _find(_episodes(ctx).items, ref, 'episode')
    generator = _episode_generator(ctx)
    # A process killed mid-call leaves the saved episode pending.
    ep = generator.recover(ep)
    if needs_auto_start(ep):
        ep = _run(ctx, "Drafting story arc proposal...", generator.auto_start, ep,
                  on_cancel=generator.cancel)
    else:
        before = ep
        ep = _run(ctx, "Writing...", generator.respond, ep, message, on_cancel=generator.cancel)
        if ep is before:
            ctx.obj['console'].print(
                f"[muted]Nothing to do in phase {ep.generation_phase.value} for that reply.[/]"
            )
            return
    _show_episode(ctx.obj['console'], ep)


@episode.command('complete')
@click.argument('ref')
@click.pass_context
def episode_complete(ctx, ref):
    """Mark an episode with a reviewed panel breakdown as complete."""
    ep = _find(_episodes(ctx).items, ref, 'episode')
    if ep.generation_phase is not Phase.PANEL_BREAKDOWN_REVIEW:
        raise click.ClickException("Only an episode in panel_breakdown_review can be completed.")
    ep = _episode_generator(ctx).complete(ep)
    ctx.obj['logger'].success(f"Episode {ep.episode_number} complete")


@episode.command('export')
@click.argument('ref')
@click.option('--format', '-f', 'fmt', type=click.Choice(['md', 'json']), default='md')
@click.option('--output', '-o', type=click.Path(file_okay=False), default='exports')
@click.pass_context
def episode_export(ctx, ref, fmt, output):
    """Export an episode as Markdown or JSON."""
    ep = _find(_episodes(ctx).items, ref, 'episode')
    path = export_work(ep, fmt, Path(output))
    click.echo(str(path))


@episode.command('delete')
@click.argument('ref')
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_context
def episode_delete(ctx, ref, yes):
    """Delete an episode."""
    library = _episodes(ctx)
    ep = _find(library.items, ref, 'episode')
    if not yes:
        click.confirm(f"Delete episode {ep.episode_number} '{ep.topic}'?", abort=True)
    library.delete(ep.id)
    ctx.obj['logger'].success(f"Deleted episode {ep.episode_number}")


def main():
    cli()

if __name__ == '__main__':
    main()
