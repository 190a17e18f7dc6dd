# One hash per entity; one field per time range holding the dataset JSON.
WINDOW_HASH = "{prefix}:{entity_id}"
