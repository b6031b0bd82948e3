"""Templates written by the ``init`` command."""

CONFIG_TEMPLATE = """# dependsload configuration
#
# Scenarios declare dependencies in their description:
#
#   Scenario: Log in
#     DependsLoad setup:Create Base User
#
# The directory name is resolved relative to `path`.

vars:
  features_root: features

# Root directory holding the feature directories
path: ${features_root}

# Only run scenarios tagged with one of these groups (dependencies are
# always included)
groups: []

# Never select scenarios tagged with one of these groups
exclude_groups: []

# Regular expression scenario titles must match
filter: null

# Actor bound to scenarios without an @actor:<name> tag
actor: null

# Scan dot-files and dot-directories for feature files
hidden_files: false

# Gherkin language of the feature files
language: null
"""
