"""
Built-in kernel suites. Each module registers one suite on import.
"""
