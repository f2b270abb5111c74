"""Plugin enumeration gateway.

Import from submodules:
- abc: PluginCatalog
- real: DirectoryPluginCatalog
- fake: FakePluginCatalog
"""
