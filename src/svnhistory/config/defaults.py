"""Starter .svnhistory.toml template."""

DEFAULT_TOML = """\
# svnhistory configuration
version = "1.0"

[repository]
# url = "file:///storage/my-repo"   # or https://... / svn://...
# username = "login"
# password is better passed via SVNHISTORY_PASSWORD

[backend]
svn_binary = "svn"
timeout = 60                # seconds per svn command
trust_server_cert = false

[normalizer]
node_kind_strategy = "extension"   # extension | backend
sort_changes = false               # true = order changes by path

[output]
format = "terminal"         # terminal | json | yaml
show_paths = true

[logging]
level = "WARNING"           # DEBUG | INFO | WARNING | ERROR
# file = "svnhistory.log"
"""
