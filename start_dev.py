#!/usr/bin/env python3
"""
LoreMaker 开发启动脚本
Starts the API with auto-reload for local development.
"""

import os
import subprocess
import sys
import webbrowser


def check_python():
    """Check if Python 3.10+ is available"""
    version = sys.version_info
    if version.major < 3 or (version.major == 3 and version.minor < 10):
        print("[ERROR] Python 3.10+ is required")
        return False
    print(f"[OK] Python {version.major}.{version.minor}.{version.micro}")
    return True


def main():
    print("=" * 60)
    print("  LoreMaker Universe - Taxonomy & Duel Engine")
    print("  Development Mode")
    print("=" * 60)
    print()

    if not check_python():
        sys.exit(1)

    backend_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend")
    env = dict(os.environ, LOREMAKER_DEBUG="true")
    port = env.get("LOREMAKER_PORT", "8000")

    print()
    print("Access URLs:")
    print(f"  API:        http://localhost:{port}")
    print(f"  API Docs:   http://localhost:{port}/docs")
    print()

    try:
        webbrowser.open(f"http://localhost:{port}/docs")
    except webbrowser.Error:
        pass

    try:
        subprocess.run([sys.executable, "-m", "loremaker.main"], cwd=backend_dir, env=env, check=True)
    except KeyboardInterrupt:
        print("\nShutting down...")
    except subprocess.CalledProcessError as e:
        print(f"[ERROR] Backend exited with code {e.returncode}")
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
