"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py with the given arguments
"""

import subprocess
import sys

if __name__ == "__main__":
    print("=" * 70)
    print("Protocol Contract Deployment")
    print("=" * 70)
    print()

    result = subprocess.run(
        [sys.executable, "scripts/deploy_contract.py", *sys.argv[1:]],
        cwd="."
    )

    sys.exit(result.returncode)
