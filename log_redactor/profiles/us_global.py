"""
US/Global profile - default redaction rules.

Common sensitive data patterns used globally and those specifically
required for US compliance (PCI-DSS, etc.), written as a rules document in
the same format as a rules file.

Patterns covered:
    - Credit Card Numbers (PCI-DSS compliance)
    - US Social Security Numbers (SSN)
    - AWS Access Key IDs (AKIA...) and secret keys
    - Bearer Tokens (JWT)
    - Generic API Keys and passwords in key=value format
    - Private key blocks
    - GitHub and Slack tokens
"""

US_GLOBAL = {
    "version": 1,
    "rules": [
        # Covers: Visa, Mastercard, Amex, Discover, JCB
        {
            "description": "Credit card number (PCI-DSS)",
            "search": (
                r"\b(?:"
                r"4[0-9]{12}(?:[0-9]{3})?|"  # Visa
                r"5[1-5][0-9]{14}|"  # Mastercard
                r"3[47][0-9]{13}|"  # Amex
                r"6(?:011|5[0-9]{2})[0-9]{12}|"  # Discover
                r"(?:2131|1800|35\d{3})\d{11}"  # JCB
                r")\b"
            ),
            "replace": "{{CREDIT_CARD}}",
        },
        {
            "description": "Formatted credit card (with spaces/dashes)",
            "search": r"\b(?:\d{4}[-\s]?){3}\d{4}\b",
            "replace": "{{CREDIT_CARD}}",
        },
        {
            "description": "US Social Security Number",
            "trigger": "-",
            "search": r"\b(?!000|666|9\d{2})\d{3}-(?!00)\d{2}-(?!0000)\d{4}\b",
            "replace": "{{SSN}}",
        },
        {
            "description": "US SSN without dashes",
            "search": r"\b(?!000|666|9\d{2})\d{3}(?!00)\d{2}(?!0000)\d{4}\b",
            "replace": "{{SSN}}",
        },
        {
            "description": "AWS Access Key ID",
            "search": r"\b(AKIA|ABIA|ACCA|ASIA)[A-Z0-9]{16}\b",
            "replace": "{{AWS_ACCESS_KEY}}",
        },
        {
            "description": "Potential AWS Secret Access Key",
            "search": r"\b[A-Za-z0-9/+=]{40}\b",
            "replace": "{{AWS_SECRET_KEY}}",
        },
        {
            "description": "JWT Bearer token",
            "trigger": "Bearer",
            "search": r"Bearer\s+eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+",
            "replace": "Bearer {{JWT_TOKEN}}",
        },
        {
            "description": "JWT token",
            "trigger": "eyJ",
            "search": r"\beyJ[A-Za-z0-9_-]{10,}\.eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\b",
            "replace": "{{JWT_TOKEN}}",
        },
        {
            "description": "API key in key=value format",
            "caseSensitive": False,
            "search": (
                r"(api[_-]?key|apikey|api[_-]?secret|secret[_-]?key|access[_-]?token|auth[_-]?token)"
                r"\s*[=:]\s*[\"']?([A-Za-z0-9_\-+=/.]{16,})[\"']?"
            ),
            "replace": "$1={{REDACTED_KEY}}",
        },
        {
            "description": "Password in logs",
            "caseSensitive": False,
            "search": r"(password|passwd|pwd)\s*[=:]\s*[\"']?([^\s\"']{4,})[\"']?",
            "replace": "$1={{REDACTED_PASSWORD}}",
        },
        {
            "description": "Private key block",
            "trigger": "-----BEGIN",
            "search": (
                r"-----BEGIN\s+(?:RSA\s+)?PRIVATE\s+KEY-----[\s\S]*?"
                r"-----END\s+(?:RSA\s+)?PRIVATE\s+KEY-----"
            ),
            "replace": "{{PRIVATE_KEY_REDACTED}}",
        },
        {
            "description": "GitHub personal access token",
            "trigger": "gh",
            "search": (
                r"\b(ghp_[A-Za-z0-9]{36}|gho_[A-Za-z0-9]{36}|ghu_[A-Za-z0-9]{36}"
                r"|ghs_[A-Za-z0-9]{36}|ghr_[A-Za-z0-9]{36})\b"
            ),
            "replace": "{{GITHUB_TOKEN}}",
        },
        {
            "description": "Slack API token",
            "trigger": "xox",
            "search": r"\b(xox[baprs]-[A-Za-z0-9\-]+)\b",
            "replace": "{{SLACK_TOKEN}}",
        },
    ],
}
