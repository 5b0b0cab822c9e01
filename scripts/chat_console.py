#!/usr/bin/env python
"""
터미널에서 Eduvane 오케스트레이터와 대화하는 콘솔 드라이버.

명령:
  /upload <path> [지시문]  파일 업로드 (이미지/PDF)
  /reset                   세션 초기화
  /quit                    종료

Usage:
  python scripts/chat_console.py [--guest]
"""

from __future__ import annotations

import argparse
import sys

from eduvane.deps import build_orchestrator
from eduvane.errors import ConfigurationError
from eduvane.models import EventType, InputFile, OrchestratorEvent, UnifiedInput
from eduvane.runtime import setup_logging
from eduvane.settings import validate_settings


def print_event(event: OrchestratorEvent) -> None:
    if event.type == EventType.STREAM_CHUNK:
        print(event.text, end="", flush=True)
    elif event.type == EventType.PHASE_UPDATE:
        print(f"\n[phase] {event.phase.value}")
    elif event.type == EventType.SUBMISSION_COMPLETE:
        result = event.submission.result
        print(f"[result] {result.subject} / {result.topic}: {result.score.value} ({result.score.label})")
        for item in result.feedback:
            print(f"  - {item.type}: {item.text}")
        for step in result.guidance:
            print(f"  > {step.step}")
    elif event.type == EventType.FOLLOW_UP:
        print(f"\n{event.text}")
    elif event.type == EventType.TASK_COMPLETE:
        print()
    elif event.type == EventType.ERROR:
        print(f"\n[error] {event.message}")


def parse_line(line: str) -> UnifiedInput | None:
    if line.startswith("/upload "):
        parts = line[len("/upload "):].strip().split(maxsplit=1)
        if not parts:
            return None
        instruction = parts[1] if len(parts) > 1 else None
        return UnifiedInput(text=instruction, file=InputFile.from_path(parts[0]))
    return UnifiedInput(text=line)


def main() -> int:
    parser = argparse.ArgumentParser(description="Eduvane console")
    parser.add_argument("--guest", action="store_true", help="게스트 세션 (프로필/기록 저장 안 함)")
    args = parser.parse_args()

    setup_logging()
    for key, warning in validate_settings().items():
        print(f"[config:{key}] {warning}")

    try:
        orchestrator = build_orchestrator(is_guest=args.guest)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        return 2

    with orchestrator.chat_session_factory:
        return run_console(orchestrator)


def run_console(orchestrator) -> int:
    """입력 루프 (/quit 또는 EOF까지)"""
    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line:
            continue
        if line == "/quit":
            return 0
        if line == "/reset":
            orchestrator.reset()
            print("세션을 초기화했습니다.")
            continue

        try:
            user_input = parse_line(line)
        except OSError as e:
            print(f"[error] 파일을 열 수 없습니다: {e}")
            continue
        if user_input is None:
            print("Usage: /upload <path> [instruction]")
            continue

        for event in orchestrator.process_input(user_input):
            print_event(event)


if __name__ == "__main__":
    sys.exit(main())
