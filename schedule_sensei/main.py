import asyncio
import json
import os
import subprocess
import sys

import typer
from dotenv import load_dotenv
load_dotenv()

from schedule_sensei.config import get_settings
from schedule_sensei.errors import ScheduleSenseiError
from schedule_sensei.ingestion import load_schedule, tasks_to_frame, summarize_schedule
from schedule_sensei.llm_agent import consult, describe_error
from schedule_sensei.logging_setup import configure_logging
from schedule_sensei.prompts import build_prompt

app = typer.Typer(help="Ask an AI scheduling consultant about an MS Project XML schedule.")

UI_SCRIPT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "ui.py")


@app.callback()
def init(log_level: str = typer.Option(None, help="Overrides SCHEDULE_SENSEI_LOG_LEVEL")):
    configure_logging(log_level or get_settings().log_level)


def _load_or_exit(file_path: str, include_summary: bool = True):
    try:
        return load_schedule(file_path, include_summary=include_summary)
    except ScheduleSenseiError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command("parse")
def parse_cli(
    file_path: str,
    as_json: bool = typer.Option(False, "--json", help="Print the task records as JSON"),
    exclude_summary: bool = typer.Option(False, "--exclude-summary", help="Drop summary rows"),
):
    tasks = _load_or_exit(file_path, include_summary=not exclude_summary)
    if as_json:
        typer.echo(json.dumps([t.to_json_dict() for t in tasks], indent=2, ensure_ascii=False))
        return
    typer.echo(f"Parsed {len(tasks)} tasks.")
    typer.echo(json.dumps(summarize_schedule(tasks), indent=2))
    if tasks:
        typer.echo(tasks_to_frame(tasks).to_string(index=False))


@app.command("prompt")
def prompt_cli(
    file_path: str,
    question: str = typer.Option("", help="Leave blank for the full analysis prompt"),
):
    tasks = _load_or_exit(file_path)
    typer.echo(build_prompt(tasks, question))


@app.command("consult")
def consult_cli(
    file_path: str,
    question: str = typer.Option("", help="Leave blank for a full schedule audit"),
    api_key: str = typer.Option(None, envvar="OPENAI_API_KEY", help="OpenAI API key"),
    exclude_summary: bool = typer.Option(False, "--exclude-summary", help="Drop summary rows"),
):
    tasks = _load_or_exit(file_path, include_summary=not exclude_summary)
    if not api_key:
        api_key = typer.prompt("OpenAI API key", hide_input=True)
    typer.echo(f"Consulting AI about {len(tasks)} tasks...")
    try:
        reply = asyncio.run(consult(tasks, question, api_key, settings=get_settings()))
    except ScheduleSenseiError as exc:
        typer.echo(f"Error: {describe_error(exc)}", err=True)
        raise typer.Exit(code=1)
    typer.echo("\nAI Response:\n" + reply)


@app.command("ui")
def ui_cli(port: int = typer.Option(8501, help="Port for the Streamlit server")):
    cmd = [sys.executable, "-m", "streamlit", "run", UI_SCRIPT, "--server.port", str(port)]
    subprocess.run(cmd, check=True)


def main():
    app()


if __name__ == "__main__":
    main()
