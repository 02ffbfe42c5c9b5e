import time
import subprocess

import httpx
import msgpack


def run_verification():
    print("Starting API Responders HTTP Server...")
    # Start the server
    server_process = subprocess.Popen(
        ["python", "-m", "uvicorn", "api.http_server:app", "--port", "8000"],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True
    )

    # Wait for server to start
    time.sleep(3)

    failures = []
    try:
        url = "http://127.0.0.1:8000"
        client = httpx.Client(base_url=url)

        # 1. Health check
        print("Checking server health...")
        health = client.get("/health")
        print(f"Health Status: {health.json()}")

        # 2. Default content type
        print("\nRequesting /v1/people with no signals...")
        resp = client.get("/v1/people")
        print(f"Content-Type: {resp.headers['content-type']} | Body: {resp.text}")
        if not resp.headers["content-type"].startswith("application/json"):
            failures.append("default content type")

        # 3. File extension beats everything
        print("\nRequesting /v1/people.msgpack?callback=cb ...")
        resp = client.get("/v1/people.msgpack", params={"callback": "cb"})
        print(f"Content-Type: {resp.headers['content-type']} | Body: {msgpack.unpackb(resp.content)}")
        if resp.headers["content-type"] != "application/x-msgpack":
            failures.append("file extension")

        # 4. JSONP callback
        print("\nRequesting /v1/people?callback=doSomething ...")
        resp = client.get("/v1/people", params={"callback": "doSomething"})
        print(f"Content-Type: {resp.headers['content-type']} | Body: {resp.text}")
        if not resp.text.startswith("doSomething("):
            failures.append("jsonp callback")

        # 5. Accept header
        print("\nRequesting /v1/people with Accept: application/x-msgpack ...")
        resp = client.get("/v1/people", headers={"Accept": "application/x-msgpack"})
        print(f"Content-Type: {resp.headers['content-type']} | Body: {msgpack.unpackb(resp.content)}")
        if resp.headers["content-type"] != "application/x-msgpack":
            failures.append("accept header")

        # 6. Errors with always200
        print("\nRequesting /v1/errors/500?always200=1 ...")
        resp = client.get("/v1/errors/500", params={"always200": "1"})
        print(f"HTTP Status: {resp.status_code} | Body: {resp.text}")
        if resp.status_code != 200 or resp.json()["s"] != 500:
            failures.append("always200")

        if failures:
            print(f"\nVerification FAILURE: {', '.join(failures)}")
        else:
            print("\nVerification SUCCESS: every negotiation signal honoured.")

    finally:
        print("\nShutting down server...")
        server_process.terminate()
        try:
            server_process.wait(timeout=5)
        except subprocess.TimeoutExpired:
            server_process.kill()

if __name__ == "__main__":
    run_verification()
