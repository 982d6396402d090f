"""Defines the composable prompts and reference texts for the virtual shell."""

HELP_TEXT = """Available Commands:

File System:
ls          - List directory contents
pwd         - Print working directory
cd          - Change directory
mkdir       - Create directory
touch       - Create file
cat         - Display file contents
echo        - Display text
rm          - Remove files
cp          - Copy files/directories
mv          - Move/rename files
chmod       - Change file permissions
find        - Find files and directories
grep        - Search text in files

Network & Downloads:
curl        - Transfer data from/to servers
wget        - Download files from web
ssh         - Secure shell remote access
scp         - Secure copy over SSH
rsync       - Sync files/directories

Development:
git         - Git version control
python      - Python interpreter
node        - Node.js runtime
java        - Java runtime
javac       - Java compiler
gcc/g++     - C/C++ compiler
make        - Build automation
npm         - Node package manager
pip         - Python package manager

System Monitoring:
top/htop    - System resource monitor
ps          - Show running processes
df          - Show disk usage
free        - Show memory usage
uname       - System information
whoami      - Current user

Text Editors:
nano/vim    - Text editors

Archive Tools:
tar         - Archive files
zip/unzip   - Compress/extract files

Utilities:
clear       - Clear terminal
history     - Show command history
help        - Show this help

Command options:
ls -l       - Long format listing
ls -a       - Show hidden files
ls -la      - Long format with hidden files
mkdir -p    - Create missing parent directories
rm -r       - Remove directories recursively
echo "text" > file - Redirect output to file"""

SESSION_PROMPT = """You are operating a simulated Unix-like terminal.

- Call `create_session` once and reuse the returned `session_id` for every `execute` call.
- Each `execute` call takes one command line and returns `output`, `error`, `currentDirectory` and `success`.
- Nothing runs for real: network tools, compilers and package managers answer with simulated output.
- The working directory persists between calls within a session; `cd` changes it.
- Run `help` to list the available commands.
"""


def get_prompts() -> dict[str, str]:
    """
    Prompt texts keyed by the name they are served under.
    """
    return {
        "help": HELP_TEXT,
        "session-instructions": SESSION_PROMPT,
    }
