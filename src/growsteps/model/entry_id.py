# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

EntryId: TypeAlias = str


def generate_entry_id() -> EntryId:
    return str(uuid.uuid4())
