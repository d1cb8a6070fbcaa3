from typing import Iterable, List, Optional

import discord

MAX_MESSAGE_LENGTH = 2000


def chunk_lines(lines: Iterable[str], max_length: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """
    Pack lines into chunks of at most max_length characters.
    A single line longer than the limit is split.
    """
    chunks = []
    current_chunk = ""

    width = max_length - 1  # room for the newline
    for line in lines:
        pieces = [line[k:k + width] for k in range(0, len(line), width)] or ['']
        for piece in pieces:
            if len(current_chunk) + len(piece) + 1 <= max_length:
                current_chunk += piece + '\n'
            else:
                chunks.append(current_chunk)
                current_chunk = piece + '\n'

    if current_chunk:
        chunks.append(current_chunk)

    return chunks


async def send_chunked_message(channel: discord.abc.Messageable, message: str,
                               reference: Optional[discord.Message] = None):
    """
    Sends a message in chunks if it exceeds Discord's character limit
    """
    if len(message) <= MAX_MESSAGE_LENGTH:
        return await channel.send(message, reference=reference)

    chunks = chunk_lines(message.split('\n'))

    # Only the first chunk replies to the original message
    await channel.send(chunks[0], reference=reference)
    for chunk in chunks[1:]:
        await channel.send(chunk)
