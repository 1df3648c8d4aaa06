"""
Helmsman renderers: top-level help, command help, version and command listing.

Palette keys
- usage-label, program-name, usage-section, description-section, footer-section
- group-label, option-name, option-type, argument-description, required-marker, default-marker
- commands-title, commands-table, command-name, command-description
- program-version, panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- When the app is not colorful, styling is suppressed; when fancy, sections are
  wrapped in a panel.
"""
from collections import defaultdict

from rich.box import ROUNDED
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .values import Kind, render_value

_palette = {
    # === Head sections ===
    "usage-label": "bold #00E6FF",  # CYAN → signature info color
    "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
    "usage-section": "bold #36C5F0",
    "description-section": "italic #A3A3A3",
    "footer-section": "#737373",

    # === Options ===
    "group-label": "bold #FFFFFF",
    "option-name": "bold #00E6FF",
    "option-type": "bold #FFD600",
    "argument-description": "#9CA3AF",
    "required-marker": "bold #EF4444",
    "default-marker": "#737373",

    # === Commands table ===
    "commands-title": "bold #FFFFFF",
    "commands-table": "#4B5563",
    "command-name": "bold #36C5F0",
    "command-description": "#9CA3AF",

    # === Version / panel ===
    "program-version": "bold #00E6FF",
    "panel-title": "bold #FF4D94",
}


def _stylist(app):
    """
    return (styler, text) helpers bound to the app's colorful flag and the host palette.
    """
    styles = defaultdict(str, _palette | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if app.colorful else ""

    def text(fragment, style=""):
        # Normalize to Text; in non-colorful mode, strip styles.
        if not fragment:
            return Text("")
        if not app.colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    return styler, text


def _chrome(app, renderable, title):
    if not app.fancy:
        return renderable
    styler, _ = _stylist(app)
    return Panel(
        renderable,
        title=Text.assemble("[", " ", f"{app.name} {title}".upper(), " ", "]", style=styler("panel-title")),
        title_align="left",
    )


def _options(app, label, options):
    """
    options section: '  -a, --name <type>   description (required) (default: x)'.
    """
    styler, text = _stylist(app)
    section = Text()
    section.append(text(label, styler("group-label"))).append(":")
    for option in options:
        spelled = Text(", ").join(text(flag, styler("option-name")) for flag in option.flags)
        if option.type is not Kind.BOOL:
            spelled.append(" ").append(text(f"<{option.type}>", styler("option-type")))
        row = Text("\n  ").append(spelled)
        row.append(" " * max(1, 26 - len(spelled)))
        row.append(text(option.descr or "", styler("argument-description")))
        if option.choices:
            row.append(" ").append(text("{%s}" % ",".join(option.choices), styler("option-type")))
        if option.required:
            row.append(" ").append(text("(required)", styler("required-marker")))
        if option.default is not None:
            row.append(" ").append(text("(default: %s)" % render_value(option.default), styler("default-marker")))
        row.rstrip()
        section.append(row)
    return section


def listing(app):
    """
    commands table in registration order (None when nothing is registered).
    """
    if not len(app.registry):
        return None
    styler, text = _stylist(app)
    table = Table(
        "name", "help",
        title=text("commands", styler("commands-title")),
        box=ROUNDED,
        style=styler("commands-table"),
        header_style=styler("commands-title"),
        title_justify="left",
    )
    for command in app.registry:
        table.add_row(
            text(command.name, styler("command-name")),
            text(command.descr or "", styler("command-description")),
        )
    return table


def render_help(app, console, /):
    """
    top-level help: description, usage, commands, global options and a footer hint.
    """
    styler, text = _stylist(app)
    renders = []

    if app.descr:
        renders.append(text(app.descr, styler("description-section")).append("\n"))

    usage = Text()
    usage.append("usage", styler("usage-label")).append(":")
    usage.append(" ")
    usage.append(text(app.name, styler("program-name")))
    usage.append(" ")
    usage.append(text("<command> [options]", styler("usage-section")))
    renders.append(usage.append("\n"))

    if (table := listing(app)) is not None:
        renders.append(table)

    if app.options:
        renders.append(_options(app, "global options", app.options).append("\n"))

    renders.append(text(
        'run "%s <command> --help" for more information about a command.' % app.name,
        styler("footer-section")
    ))

    console.print(_chrome(app, Group(*renders), "help"))


def render_command_help(app, command, console, /):
    """
    command help: usage, description and the command's own options.
    """
    styler, text = _stylist(app)
    renders = []

    usage = Text()
    usage.append("usage", styler("usage-label")).append(":")
    usage.append(" ")
    usage.append(text(f"{app.name} {command.name}", styler("program-name")))
    if command.options:
        usage.append(" ")
        usage.append(text("[options]", styler("usage-section")))
    renders.append(usage.append("\n"))

    if command.descr:
        renders.append(text(command.descr, styler("description-section")).append("\n" * bool(command.options)))

    if command.options:
        renders.append(_options(app, "options", command.options))

    console.print(_chrome(app, Group(*renders), f"{command.name} help"))


def render_version(app, console, /):
    styler, text = _stylist(app)
    console.print(_chrome(app, text(f"v{app.version}", styler("program-version")), "version"))


__all__ = (
    "listing",
    "render_help",
    "render_command_help",
    "render_version",
)
