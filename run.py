# run.py
"""
Repo-level runner:
- python run.py api            -> starts the FastAPI scene server (uvicorn)
- python run.py <cli args...>  -> runs stickman.main, e.g. python run.py generate "A throws a vase at B"
"""
import sys
import subprocess

def run_api():
    print("Starting scene API at http://127.0.0.1:8000 ...")
    return subprocess.call([sys.executable, "-m", "uvicorn", "web_app.api:app", "--reload"])

def run_cli(args):
    cmd = [sys.executable, "-m", "stickman.main"] + args
    print(f"▶ Running: {' '.join(cmd)}")
    return subprocess.call(cmd)

def main():
    if len(sys.argv) < 2:
        print("Usage:\n  python run.py api\n  python run.py generate \"A throws a vase at B\" --seed 3")
        return 1
    if sys.argv[1].lower() == "api":
        return run_api()
    return run_cli(sys.argv[1:])

if __name__ == "__main__":
    sys.exit(main())
