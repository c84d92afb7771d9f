import re
from pathlib import Path

DEPLOYED_VARS = [
    "API_LOGIN_ID", "API_PREFIX", "APP_DEBUG", "APP_ENV", "APP_NAME",
    "AUTHORIZE_NET_ENV", "AUTHORIZE_NET_TIMEOUT", "CORS_ORIGINS",
    "FRONTEND_URL", "HOSTED_PROFILE_VALIDATION_MODE", "LOG_LEVEL",
    "PORT", "TRANSACTION_KEY",
]


def find_env_vars():
    """Find all environment variables the settings and code read."""
    env_vars = set()
    for py_file in Path("app").rglob("*.py"):
        content = py_file.read_text(encoding="utf-8", errors="ignore")
        env_vars.update(re.findall(r'alias=["\']([A-Z0-9_]+)["\']', content))
        env_vars.update(re.findall(r'os\.getenv\(["\']([A-Z0-9_]+)["\']', content))
        env_vars.update(re.findall(r'os\.environ\[\s*["\']([A-Z0-9_]+)["\']\s*\]', content))
    return sorted(env_vars)


def verify_against_deployment():
    code_vars = set(find_env_vars())
    deployed = set(DEPLOYED_VARS)
    missing = sorted(code_vars - deployed)
    unused = sorted(deployed - code_vars - {"PORT"})

    print("=== ENV VAR VERIFICATION ===")
    print(f"Code references: {len(code_vars)} unique vars")
    print(f"Deployment list has: {len(DEPLOYED_VARS)} vars")
    print("")
    if missing:
        print(f"MISSING IN DEPLOYMENT ({len(missing)}):")
        for v in missing:
            print(f"  - {v}")
    else:
        print("No missing vars against deployment list.")
    print("")
    if unused:
        print(f"UNUSED IN CODE ({len(unused)}):")
        for v in unused:
            print(f"  - {v}")
    else:
        print("No unused deployment vars.")


if __name__ == "__main__":
    verify_against_deployment()
