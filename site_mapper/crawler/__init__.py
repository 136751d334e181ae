"""site_mapper.crawler: fetching, link extraction and recursive task dispatch."""
