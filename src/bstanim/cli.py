"""Command line interface for headless replay and export."""

import logging
from typing import List, Optional

import click

from bstanim.animators import TraversalOrder
from bstanim.config import load_config
from bstanim.engine import AnimationEngine
from bstanim.errors import AnimationError
from bstanim.render import SUPPORTED_FORMATS, output_extension, render
from bstanim.script import load_script, run_script


def _parse_keys(value: Optional[str]) -> List[int]:
    if not value:
        return []
    try:
        return [int(part) for part in value.replace(" ", "").split(",") if part]
    except ValueError:
        raise click.BadParameter(f"keys must be comma-separated integers, got {value!r}")


def _build_engine(ctx: click.Context, keys: List[int]) -> AnimationEngine:
    engine = AnimationEngine(ctx.obj["config"])
    for key in keys:
        engine.start_insert(key)
    engine.run_until_idle(fps=ctx.obj["fps"])
    # Let freshly inserted nodes settle into place
    engine.update(1.0 / ctx.obj["fps"], ticks=int(2 * ctx.obj["fps"]))
    return engine


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file with pacing/layout settings",
)
@click.option("--fps", default=60.0, show_default=True, help="Simulated frame rate")
@click.option("-v", "--verbose", count=True, help="-v for INFO, -vv for DEBUG logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], fps: float, verbose: int) -> None:
    """Animated binary search tree engine."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if fps <= 0:
        raise click.BadParameter("fps must be positive", param_hint="--fps")
    try:
        config = load_config(config_path)
    except AnimationError as e:
        raise click.ClickException(str(e))
    ctx.obj = {"config": config, "fps": fps}


@main.command()
@click.argument("script", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Export the final frame to this basename")
@click.option(
    "--format",
    "format_",
    type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False),
    default="json",
    show_default=True,
)
@click.option("--trace", is_flag=True, help="Print cursor and narration changes per frame")
@click.pass_context
def replay(
    ctx: click.Context, script: str, output: Optional[str], format_: str, trace: bool
) -> None:
    """Replay an event SCRIPT headlessly."""
    engine = AnimationEngine(ctx.obj["config"])
    last = {"cursor": None, "edge": None, "step": None}

    def on_frame(engine: AnimationEngine) -> None:
        cursor = engine.cursor.key if engine.cursor is not None else None
        edge = (engine.edge[0].key, engine.edge[1].key) if engine.edge else None
        step = engine.narration.current
        if (cursor, edge, step) != (last["cursor"], last["edge"], last["step"]):
            click.echo(
                f"t={engine.clock:7.3f} mode={engine.mode.value:<10} "
                f"cursor={cursor} edge={edge} step={step!r}"
            )
            last.update(cursor=cursor, edge=edge, step=step)

    try:
        events = load_script(script)
        results = run_script(
            engine, events, fps=ctx.obj["fps"], on_frame=on_frame if trace else None
        )
    except AnimationError as e:
        raise click.ClickException(str(e))

    for result in results:
        argument = "" if result.event.argument is None else f" {result.event.argument}"
        status = "ok" if result.started else "no-op"
        click.echo(
            f"{result.event.action}{argument}: {status} ({result.elapsed:.2f}s) "
            f"keys={[node.key for node in sorted(result.snapshot.nodes, key=lambda n: n.key)]}"
        )

    if output:
        try:
            render(engine, output, format=format_)
        except AnimationError as e:
            raise click.ClickException(str(e))
        click.echo(f"Wrote {output}.{output_extension(format_)}")


@main.command()
@click.option("--keys", required=True, help="Comma-separated keys to insert first")
@click.option(
    "--order",
    type=click.Choice([order.value for order in TraversalOrder]),
    default="inorder",
    show_default=True,
)
@click.pass_context
def traverse(ctx: click.Context, keys: str, order: str) -> None:
    """Run the traversal machine and print the visit order."""
    engine = _build_engine(ctx, _parse_keys(keys))
    animator = None
    if engine.start_traversal(order):
        animator = engine.active
        engine.run_until_idle(fps=ctx.obj["fps"])
    visited = animator.visited if animator is not None else []
    click.echo(" ".join(str(key) for key in visited))


@main.command()
@click.option("--keys", required=True, help="Comma-separated keys to insert first")
@click.argument("key", type=int)
@click.pass_context
def search(ctx: click.Context, keys: str, key: int) -> None:
    """Run the search machine for KEY and print the hop path."""
    engine = _build_engine(ctx, _parse_keys(keys))
    path: List[int] = []

    engine.start_search(key)
    while not engine.is_idle:
        if engine.cursor is not None and (not path or path[-1] != engine.cursor.key):
            path.append(engine.cursor.key)
        engine.update(1.0 / ctx.obj["fps"])

    click.echo(f"path: {' -> '.join(str(k) for k in path) or '(empty tree)'}")
    click.echo(f"found: {'yes' if engine.found else 'no'}")


@main.command()
@click.option("--keys", required=True, help="Comma-separated keys to insert")
@click.option("--output", "-o", required=True, help="Output basename")
@click.option(
    "--format",
    "format_",
    type=click.Choice(SUPPORTED_FORMATS, case_sensitive=False),
    default="html",
    show_default=True,
)
@click.pass_context
def export(ctx: click.Context, keys: str, output: str, format_: str) -> None:
    """Insert keys, let the layout settle and export the frame."""
    engine = _build_engine(ctx, _parse_keys(keys))
    try:
        render(engine, output, format=format_)
    except AnimationError as e:
        raise click.ClickException(str(e))
    click.echo(f"Wrote {output}.{output_extension(format_)}")


if __name__ == "__main__":
    main()
