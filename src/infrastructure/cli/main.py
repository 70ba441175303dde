import typer

from .commands import (
    images as images_cmd,
    predict as predict_cmd,
    settings as settings_cmd,
    validate as validate_cmd,
    video as video_cmd,
)

app = typer.Typer(help="Toolbox CLI")

app.add_typer(images_cmd.app, name="images")
app.add_typer(video_cmd.app, name="video")
app.add_typer(settings_cmd.app, name="settings")
app.add_typer(predict_cmd.app, name="predict")
app.add_typer(validate_cmd.app, name="validate")


if __name__ == "__main__":
    app()
