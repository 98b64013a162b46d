import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent
PY_FILES = [
    "ghostdrop_app.py",
    "ghostdrop/paths.py",
    "ghostdrop/constants.py",
    "ghostdrop/errors.py",
    "ghostdrop/context.py",
    "ghostdrop/domain/models.py",
    "ghostdrop/domain/helpers.py",
    "ghostdrop/infra/config_store.py",
    "ghostdrop/infra/mail_client.py",
    "ghostdrop/infra/session_store.py",
    "ghostdrop/services/assistant.py",
    "ghostdrop/services/mail_sync.py",
    "ghostdrop/services/message_detail.py",
    "ghostdrop/services/provisioning.py",
    "ghostdrop_qt/mixins/chat.py",
    "ghostdrop_qt/window.py",
]


def run(cmd):
    print("> " + " ".join(cmd))
    result = subprocess.run(cmd, cwd=ROOT)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


def main():
    run([sys.executable, "-m", "py_compile", *PY_FILES])
    run([sys.executable, "-c", "import ghostdrop, ghostdrop_qt.window; print('imports ok')"])
    run([sys.executable, "-m", "pytest", "-q"])
    print("All automated checks passed.")


if __name__ == "__main__":
    main()
