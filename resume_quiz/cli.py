import argparse
import asyncio
import logging
import sys

import httpx
import uvicorn

from resume_quiz.client import QuizClient
from resume_quiz.config import get_settings
from resume_quiz.session import QuizState, QuizStateError


HELP = "Commands: a-d answer | n next | p previous | g N go to | r reference | s submit | q quit"


def _print_question(client: QuizClient):
    session = client.session
    q = session.current_question
    print(f"\nQuestion {session.current_index + 1} of {len(session.questions)} [{q.difficulty}]"
          f"  ({session.answered_count}/{len(session.questions)} answered)")
    print(q.question)
    selected = session.answers.get(session.current_index)
    for i, opt in enumerate(q.options):
        marker = "*" if selected == i else " "
        print(f" {marker} {chr(97 + i)}) {opt}")


def _print_results(client: QuizClient):
    summary = client.result_summary
    print(f"\nYour Score: {summary['score']}% ({summary['correct']}/{summary['total']} correct) [{summary['color']}]")
    print(summary["message"])
    for i, q in enumerate(client.session.questions):
        picked = client.session.answers.get(i)
        status = "correct" if picked == q.correct_answer else "wrong"
        print(f"\nQ{i + 1} ({status}): {q.question}")
        print(f"  Answer: {q.options[q.correct_answer]}")
        print(f"  {q.explanation}")


async def _run_quiz(client: QuizClient):
    print(HELP)
    while client.state == QuizState.IN_PROGRESS:
        _print_question(client)
        command = input("> ").strip().lower()
        try:
            if command in ("a", "b", "c", "d"):
                client.select_answer(ord(command) - ord("a"))
            elif command == "n":
                client.next()
            elif command == "p":
                client.previous()
            elif command.startswith("g "):
                client.go_to(int(command[2:]) - 1)
            elif command == "r":
                print("Fetching reference...")
                text = await client.reference()
                print(text if text is not None else client.error)
            elif command == "s":
                await client.submit()
            elif command == "q":
                return
            else:
                print(HELP)
        except (QuizStateError, ValueError) as e:
            print(e)

    _print_results(client)


async def take(args) -> int:
    client = QuizClient()
    if not client.login(args.token):
        print(client.error, file=sys.stderr)
        return 1

    print(f"Signed in as {client.user.name} <{client.user.email}>")
    try:
        with open(args.resume, "rb") as f:
            data = f.read()
    except OSError as e:
        print(f"Could not read resume: {e}", file=sys.stderr)
        return 1
    if not client.upload_resume(data):
        print(client.error, file=sys.stderr)
        return 1

    print("Generating questions...")
    if not await client.generate():
        print(client.error, file=sys.stderr)
        return 1

    await _run_quiz(client)
    if client.state == QuizState.COMPLETED and args.report:
        print(f"Report written to {client.download_report(args.report)}")
    return 0


async def leaderboard(args) -> int:
    client = QuizClient()
    try:
        entries = await client.leaderboard()
    except (httpx.HTTPError, ValueError) as e:
        print(f"Could not load leaderboard: {e}", file=sys.stderr)
        return 1

    for rank, entry in enumerate(entries, start=1):
        print(f"{rank:>2}. {entry.get('name') or entry['email']:<30} {entry['score']:>3}%")
    return 0


def serve(args) -> int:
    settings = get_settings()
    uvicorn.run(
        "resume_quiz.main:app",
        host=args.host or settings.app_host,
        port=args.port or settings.app_port,
    )
    return 0


def main(argv=None) -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s")

    parser = argparse.ArgumentParser(prog="resume-quiz", description="Resume interview quiz")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the leaderboard service")
    p_serve.add_argument("--host")
    p_serve.add_argument("--port", type=int)

    p_take = sub.add_parser("take", help="Take a quiz generated from a resume")
    p_take.add_argument("resume", help="Path to a PDF resume")
    p_take.add_argument("--token", required=True, help="Identity token from the sign-in provider")
    p_take.add_argument("--report", help="Write a PDF report here when finished")

    sub.add_parser("leaderboard", help="Show the top scores")

    args = parser.parse_args(argv)
    if args.command == "serve":
        return serve(args)
    if args.command == "take":
        return asyncio.run(take(args))
    return asyncio.run(leaderboard(args))


if __name__ == "__main__":
    sys.exit(main())
