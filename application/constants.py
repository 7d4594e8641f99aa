"""Application-level constants."""

# Keys for serialization
NODE_ID_KEY = "id"
NODE_NAME_KEY = "name"
NODE_CHILDREN_KEY = "children"
MATCH_KIND_KEY = "kind"
MATCH_PATH_KEY = "path"

# View names (also used as log context)
WHOLE_VIEW = "whole"
FOCUS_VIEW = "focus"

# Output filenames
TREE_FILENAME = "tree.json"
FOCUS_TREE_FILENAME = "focus_tree.json"
SEARCH_RESULTS_FILENAME = "search_results.json"
CONFIG_SNAPSHOT_FILENAME = "config.resolved.json"
LOG_FILENAME = "run.log"

