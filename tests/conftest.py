"""
Shared fixtures for MySQL Dump Runner tests.
"""

import stat
import sys
import textwrap

import pytest

FAKE_MYSQLDUMP = textwrap.dedent("""\
    #!{python}
    import json
    import os
    import sys

    sys.stdout.write(json.dumps(sys.argv[1:]))
    sys.stderr.write(os.environ.get("FAKE_MYSQLDUMP_STDERR", ""))
    sys.exit(int(os.environ.get("FAKE_MYSQLDUMP_EXIT", "0")))
""")


@pytest.fixture
def fake_mysqldump(tmp_path):
    """Executable stand-in for mysqldump that echoes its arguments as JSON.

    FAKE_MYSQLDUMP_STDERR and FAKE_MYSQLDUMP_EXIT control its stderr and exit code.
    """
    script = tmp_path / "mysqldump"
    script.write_text(FAKE_MYSQLDUMP.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)
