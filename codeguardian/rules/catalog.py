"""Built-in detection rules.

Entries are evaluated in the order listed here. ``eval(``, ``os.system(``,
the PEM header and the weak-random patterns are matched case-sensitively;
every other pattern ignores case.
"""

RULE_DEFINITIONS: list[dict] = [
    # Hardcoded secrets
    {
        "id": "API_KEY",
        "pattern": r"""(api[_\-]?key|apikey)\s*[=:]\s*['"]([a-zA-Z0-9_\-]{16,})['"]""",
        "category": "Hardcoded API Key",
        "suggestion": "Store API keys in environment variables or secure configuration files",
        "severity": "HIGH",
        "group": "secrets",
        "cwe_id": "CWE-798",
    },
    {
        "id": "PASSWORD",
        "pattern": r"""(password|pwd|pass)\s*[=:]\s*['"]([^'"\s]{4,})['"]""",
        "category": "Hardcoded Password",
        "suggestion": "Use environment variables or secure credential management",
        "severity": "CRITICAL",
        "group": "secrets",
        "cwe_id": "CWE-798",
    },
    {
        "id": "JWT_SECRET",
        "pattern": r"""(jwt[_\-]?secret|secret[_\-]?key)\s*[=:]\s*['"]([a-zA-Z0-9_\-]{20,})['"]""",
        "category": "Hardcoded JWT Secret",
        "suggestion": "Store JWT secrets in secure environment variables",
        "severity": "CRITICAL",
        "group": "secrets",
        "cwe_id": "CWE-798",
    },
    {
        "id": "DATABASE_URL",
        "pattern": (
            r"""(database[_\-]?url|db[_\-]?url|connection[_\-]?string)"""
            r"""\s*[=:]\s*['"]([^'"\s]+://[^'"\s]+)['"]"""
        ),
        "category": "Hardcoded Database URL",
        "suggestion": "Use environment variables for database connection strings",
        "severity": "HIGH",
        "group": "secrets",
        "cwe_id": "CWE-798",
    },
    {
        "id": "PRIVATE_KEY",
        "pattern": r"-----BEGIN\s+(RSA\s+)?PRIVATE\s+KEY-----",
        "ignore_case": False,
        "category": "Hardcoded Private Key",
        "suggestion": "Store private keys in secure key management systems",
        "severity": "CRITICAL",
        "group": "secrets",
        "cwe_id": "CWE-321",
    },
    # Unsafe functions and imports
    {
        "id": "EVAL_USAGE",
        "pattern": r"\beval\s*\(",
        "ignore_case": False,
        "category": "Use of eval() function",
        "suggestion": "Avoid eval() - use safer alternatives like JSON.parse() or specific parsing libraries",
        "severity": "HIGH",
        "group": "unsafe_practices",
        "cwe_id": "CWE-95",
    },
    {
        "id": "SUBPROCESS_SHELL",
        "pattern": r"subprocess\.(call|run|Popen)\s*\([^)]*shell\s*=\s*True",
        "category": "Subprocess with shell=True",
        "suggestion": "Avoid shell=True in subprocess calls - use direct command execution",
        "severity": "HIGH",
        "group": "unsafe_practices",
        "cwe_id": "CWE-78",
    },
    {
        "id": "OS_SYSTEM",
        "pattern": r"\bos\.system\s*\(",
        "ignore_case": False,
        "category": "Use of os.system()",
        "suggestion": "Replace os.system() with subprocess.run() for better security",
        "severity": "MEDIUM",
        "group": "unsafe_practices",
        "cwe_id": "CWE-78",
    },
    {
        "id": "DANGEROUS_IMPORTS",
        "pattern": r"import\s+(pickle|marshal|shelve|dill)\b",
        "category": "Potentially dangerous import",
        "suggestion": "Be cautious with serialization libraries - validate input sources",
        "severity": "MEDIUM",
        "group": "unsafe_practices",
        "cwe_id": "CWE-502",
    },
    # Injection and weak primitives
    {
        "id": "SQL_INJECTION",
        "pattern": r"""(select|insert|update|delete)\s+.*(\+|\||f['"]).*\bwhere\b""",
        "category": "Potential SQL Injection",
        "suggestion": "Use parameterized queries or prepared statements",
        "severity": "HIGH",
        "group": "vulnerabilities",
        "cwe_id": "CWE-89",
    },
    {
        "id": "XSS_VULNERABILITY",
        "pattern": r"innerHTML\s*[=:]\s*[^;]*\+|document\.write\s*\([^)]*\+",
        "category": "Potential XSS Vulnerability",
        "suggestion": "Sanitize user input and use textContent instead of innerHTML",
        "severity": "HIGH",
        "group": "vulnerabilities",
        "cwe_id": "CWE-79",
    },
    {
        "id": "WEAK_RANDOM",
        "pattern": r"\b(Math\.random|random\.random)\s*\(\)",
        "ignore_case": False,
        "category": "Weak Random Generation",
        "suggestion": "Use cryptographically secure random generators for security purposes",
        "severity": "MEDIUM",
        "group": "vulnerabilities",
        "cwe_id": "CWE-338",
    },
    # Code quality
    {
        "id": "HARDCODED_URL",
        "pattern": r"""https?://[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}[^\s'"]*""",
        "category": "Hardcoded URL",
        "suggestion": "Consider using configuration files for URLs and endpoints",
        "severity": "LOW",
        "group": "code_quality",
    },
    {
        "id": "COMMENTED_SECRETS",
        "pattern": r"""//.*(?:password|secret|key|token)\s*[=:]\s*['"]?[a-zA-Z0-9_\-]{8,}""",
        "category": "Commented Credentials",
        "suggestion": "Remove commented credentials from source code",
        "severity": "MEDIUM",
        "group": "code_quality",
        "cwe_id": "CWE-615",
    },
]
