from shortlinks.dao.memory.short_link_memory_dao import ShortLinkMemoryDAO


__all__ = [
    'ShortLinkMemoryDAO',
]
