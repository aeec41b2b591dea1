"""CLI: send one message to the conversation canister. For the API, use: python run_api.py."""
import argparse
import sys

from dotenv import load_dotenv

load_dotenv()

from ventrelay.core.conversation_service import get_conversation_service, reset_conversation_service
from ventrelay.core.errors import RelayError
from ventrelay.core.relay_client import open_relay


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Send a message to the conversation canister.")
    parser.add_argument("message", help="Text to send")
    parser.add_argument("--session", default="", help="Existing session id to continue")
    parser.add_argument("--history", action="store_true", help="Print the session history after the reply")
    args = parser.parse_args(argv)

    relay = open_relay(get_conversation_service(), args.session)
    try:
        if not relay.get_session_id():
            relay.create_session()
        reply = relay.send_message(args.message)
        print(reply.text)
        print(f"(session: {relay.get_session_id()})")
        if args.history:
            for m in relay.get_session_history():
                who = "you" if m.is_user else "bot"
                print(f"[{m.timestamp}] {who}: {m.text}")
    except RelayError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        reset_conversation_service()
    return 0


if __name__ == "__main__":
    sys.exit(main())
