"""
Bundled table resources for txtdata.

``txtdata/`` holds the default tab-separated tables. The default
``DirectoryResourceLoader`` (resources.py in the parent package) serves
resource names such as ``txtdata\\Experience.tsv`` from this directory.
"""
