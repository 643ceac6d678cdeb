"""CLI entrypoint: Typer app definition and command registration"""

import typer

from docshift.cli.commands import (
    analyze_cmd,
    compress_cmd,
    configure_logging,
    convert_cmd,
    dimensions_cmd,
    formats_cmd,
    line_endings_cmd,
    resize_cmd,
    strip_bom_cmd,
)


app = typer.Typer(name="docshift", no_args_is_help=True, help="Local document format conversion")

app.callback()(configure_logging)
app.command(name="convert")(convert_cmd)
app.command(name="formats")(formats_cmd)
app.command(name="analyze")(analyze_cmd)
app.command(name="line-endings")(line_endings_cmd)
app.command(name="strip-bom")(strip_bom_cmd)
app.command(name="resize")(resize_cmd)
app.command(name="compress")(compress_cmd)
app.command(name="dimensions")(dimensions_cmd)
