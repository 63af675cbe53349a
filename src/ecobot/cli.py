"""Interactive terminal front-end for the EcoBot questionnaire."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable
from typing import TextIO

from ecobot.conversation import ConversationTurn, Speaker
from ecobot.logging_pipeline import configure_logging
from ecobot.models import RespondentKind
from ecobot.reporting import build_report, export_report, render_summary
from ecobot.sequencer import ChatSession, Question
from ecobot.settings import get_settings
from ecobot.share import build_share_url, open_share_link

COMMANDS_HINT = "Commands: /reset to start over, /share to share, /quit to exit."


def _format_turn(turn: ConversationTurn) -> str:
    prefix = "EcoBot" if turn.speaker is Speaker.BOT else "You"
    return f"{prefix}: {turn.content}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecobot",
        description="Calculate an annual carbon footprint through a short chat.",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for stderr output (defaults to ECOBOT_LOG_LEVEL).",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit log records as JSON lines.",
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Show the result immediately after the last answer.",
    )
    parser.add_argument(
        "--export",
        "-o",
        metavar="PATH",
        help="Write a JSON report to PATH once the footprint is calculated.",
    )
    parser.add_argument(
        "--open-share",
        action="store_true",
        help="Open the share link in a browser once the footprint is calculated.",
    )
    return parser


class _Terminal:
    """Render a session to a text stream and feed it lines of input."""

    def __init__(
        self,
        session: ChatSession,
        *,
        output: TextIO,
        share_base_url: str,
        export_path: str | None,
        open_share: bool,
    ) -> None:
        self.session = session
        self.output = output
        self.share_base_url = share_base_url
        self.export_path = export_path
        self.open_share = open_share
        self._printed = 0
        self._summary_shown = False

    def emit(self, line: str = "") -> None:
        print(line, file=self.output)

    def flush_turns(self) -> None:
        for turn in self.session.log.since(self._printed):
            self.emit(_format_turn(turn))
        self._printed = len(self.session.log)

    def show_affordance(self) -> None:
        if self.session.is_complete:
            if not self._summary_shown:
                self._finish()
            return
        choices = self.session.choices()
        if choices:
            buttons = "  ".join(
                f"[{index}] {choice.label}" for index, choice in enumerate(choices, start=1)
            )
            self.emit(buttons)

    def _finish(self) -> None:
        self._summary_shown = True
        self.emit()
        for line in render_summary(self.session):
            self.emit(line)
        self.emit()
        if self.export_path:
            report = build_report(self.session, share_base_url=self.share_base_url)
            target = export_report(report, self.export_path)
            self.emit(f"Report saved to {target}")
        if self.open_share:
            self.share()
        self.emit(COMMANDS_HINT)

    def share(self) -> None:
        if not self.session.is_complete:
            self.emit("Finish the questions first to share your footprint.")
            return
        url = build_share_url(self.session.result().total, self.share_base_url)
        self.emit(f"Share your impact: {url}")
        open_share_link(url)

    def reset(self) -> None:
        self.session.reset()
        self._printed = 0
        self._summary_shown = False

    def handle(self, line: str) -> bool:
        """Process one line of input; return ``False`` to stop."""

        text = line.strip()
        if text == "/quit":
            return False
        if text == "/reset":
            self.reset()
            return True
        if text == "/share":
            self.share()
            return True

        session = self.session
        if session.expects_choice:
            choices = session.choices()
            if text.isdecimal() and 1 <= int(text) <= len(choices):
                pressed = choices[int(text) - 1]
                if session.current_question is Question.CHOOSE_KIND:
                    session.select_kind(RespondentKind(pressed.value))
                else:
                    session.select_choice(pressed.value)
            elif text:
                session.select_choice(text)
        elif session.expects_number:
            session.submit_number(text)
        return True


def main(
    argv: list[str] | None = None,
    *,
    input_func: Callable[[str], str] = input,
    output: TextIO | None = None,
) -> int:
    """Run the chat until the user quits or input ends."""

    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    out = output or sys.stdout
    settings = get_settings()
    level_name = (args.log_level or settings.log_level).upper()
    levels = logging.getLevelNamesMapping()
    if level_name not in levels:
        print(f"Unknown log level: {args.log_level}", file=sys.stderr)
        return 1
    configure_logging(
        level=levels[level_name], json_output=args.json_logs or settings.log_json
    )

    try:
        session = ChatSession(
            result_delay_seconds=0.0 if args.no_delay else None,
            settings=settings,
        )
    except (FileNotFoundError, RuntimeError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    terminal = _Terminal(
        session,
        output=out,
        share_base_url=settings.share_base_url,
        export_path=args.export,
        open_share=args.open_share,
    )

    while True:
        terminal.flush_turns()
        try:
            terminal.show_affordance()
        except OSError as exc:
            print(f"Failed to write report: {exc}", file=sys.stderr)
            return 1
        try:
            line = input_func("> ")
        except (EOFError, KeyboardInterrupt):
            terminal.emit()
            break
        if not terminal.handle(line):
            break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
