# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real credentials. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # Credentials (CLI only; the library never reads them implicitly)
    "NIRVANA_USERNAME": "Account login (email).",
    "NIRVANA_PASSWORD": (
        "Plain password; hashed with MD5 before it is sent. Setups that stored the MD5 "
        "digest here must move it to NIRVANA_PASSWORD_MD5, or it gets hashed twice."
    ),
    "NIRVANA_PASSWORD_MD5": "Pre-hashed password; takes precedence over NIRVANA_PASSWORD.",
    # API
    "NIRVANA_BASE_URL": "API root (default: https://api.nirvanahq.com/).",
    "NIRVANA_APP_ID": "appid query parameter (default: nirvana-sdk-python).",
    "NIRVANA_APP_VERSION": "appversion query parameter (default: 1).",
    "NIRVANA_USER_AGENT": "Optional User-Agent header.",
    "NIRVANA_TIMEOUT_SECONDS": "HTTP timeout in seconds (default: 30).",
    # Debug dump (gitignored)
    "NIRVANA_DUMP_RESPONSES": "Write every raw response body to disk (true/false).",
    "NIRVANA_DATA_DIR": "Local data/log directory (default: .local/nirvana).",
    "NIRVANA_DUMP_PATH": "Dump file (default: <data_dir>/nirvana_response.dump.json).",
    # CLI
    "NIRVANA_SINCE": "Retrieve everything changed since this unix time (default: 0).",
    "NIRVANA_LOG_LEVEL": "Console logging level (default: INFO).",
}
