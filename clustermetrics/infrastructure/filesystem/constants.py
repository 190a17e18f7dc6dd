ARTIFACT_FILE = "{prefix}-{time_range}.json"
CURRENT_LINK = "current"
VERSIONS_DIR = "versions"
STAGING_PREFIX = ".staging-"
