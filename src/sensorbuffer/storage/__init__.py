"""Local-disk storage for sensor events.

Events are written one XML file each into ``<root>/<owner>/<YYYY_MM_DD>/``
so they can be bulk-imported into a collection server later.
"""
