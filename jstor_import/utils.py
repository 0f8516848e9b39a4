from pathlib import Path
from typing import List

import aiofiles


def find_format(file_path: Path) -> str:
    return file_path.suffix.lstrip('.').lower()


async def read_bytes(file_path: Path) -> bytes:
    # XML declares its own encoding, so hand the parser raw bytes
    async with aiofiles.open(file_path, 'rb') as f:
        return await f.read()


def chunked(items: List, size: int) -> List[List]:
    return [items[i:i + size] for i in range(0, len(items), size)]
