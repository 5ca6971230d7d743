import logging
import threading
import time
import webbrowser

import uvicorn

from linkstash.config import HOST, PORT

DOCS_URL = f"http://{HOST}:{PORT}/docs"


def serve():
    uvicorn.Server(
        uvicorn.Config("linkstash.main:app", host=HOST, port=PORT, log_level="info")
    ).run()


def show_docs():
    print(f"[server] API docs at {DOCS_URL}")
    try:
        webbrowser.open(DOCS_URL)
    except webbrowser.Error as exc:
        print(f"[server] Could not open a browser: {exc}")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")

    t = threading.Thread(target=serve, daemon=True)
    t.start()
    time.sleep(1.0)
    show_docs()

    print("[server] Running. Press Ctrl+C to quit.")
    try:
        while t.is_alive():
            time.sleep(1.0)
    except KeyboardInterrupt:
        print("\n[server] Shutting down.")


if __name__ == "__main__":
    main()
