"""Well-known names used during binding-context discovery."""

# Reserved configuration key naming the factory to use. Read from the
# properties map, from the process environment and from legacy
# ``binding.properties`` resources.
FACTORY_KEY = "bindctx.ContextFactory"

# Older key still honoured inside ``binding.properties`` resources.
LEGACY_FACTORY_KEY = "bindctx.context.factory"

# Shell-friendly alias for FACTORY_KEY in the process environment.
FACTORY_ENV_VAR = "BINDCTX_CONTEXT_FACTORY"

# Entry-point group scanned for registered factories.
ENTRY_POINT_GROUP = "bindctx.context_factories"

# Per-package resources.
PROPERTIES_FILE_NAME = "binding.properties"
INDEX_FILE_NAME = "binding.index"
INDEX_COMMENT_MARKER = "#"

# Class looked up in every package of a package path before the index file.
CONVENTIONAL_FACTORY_NAME = "ObjectFactory"

# Factory used when no other tier names one.
DEFAULT_FACTORY_CLASS = "bindctx.infrastructure.default_provider.DefaultContextFactory"

# Top-level package of this library; identifies the core isolation unit.
CORE_PACKAGE = "bindctx"
