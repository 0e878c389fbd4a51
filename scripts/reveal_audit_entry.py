# scripts/reveal_audit_entry.py
#
# Usage: python scripts/reveal_audit_entry.py <entry_id> [role]
# Decrypts the original content of one audit entry. Role defaults to auditor.

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio
import json

from secure_inquiry.api import dependencies
from secure_inquiry.governance.exceptions import GovernanceError
from secure_inquiry.security.exceptions import SecurityError
from secure_inquiry.security.rbac import Role


async def reveal(entry_id: str, role: Role) -> int:
    await dependencies.init_resources()
    try:
        original = await dependencies.get_audit_store().reveal_original(entry_id, role=role)
    except (GovernanceError, SecurityError) as e:
        print(f"Cannot reveal {entry_id}: {e.message}", file=sys.stderr)
        return 1
    finally:
        await dependencies.close_resources()
    print(json.dumps(original, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: reveal_audit_entry.py <entry_id> [admin|auditor|operator]", file=sys.stderr)
        sys.exit(2)
    role = Role(sys.argv[2].upper()) if len(sys.argv) > 2 else Role.AUDITOR
    sys.exit(asyncio.run(reveal(sys.argv[1], role)))
