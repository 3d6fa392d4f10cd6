from .buffer import BufferHost, MarkdownBuffer, parse_atx_headers
