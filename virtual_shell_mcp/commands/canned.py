"""
Canned console output for simulated external tools.

Every function here is pure: it renders fixed or templated text from its
arguments and lists the filesystem side effects the command would have. The
command classes apply those effects to the store. Nothing is executed.
"""

from dataclasses import dataclass, field
from datetime import datetime

from virtual_shell_mcp.models.node import EXECUTABLE_PERMISSIONS, NodeSpec, byte_size


@dataclass
class CannedResponse:
    output: str = ""
    effects: list[NodeSpec] = field(default_factory=list)
    # Set for simulated failures; the output then carries the console text.
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _host_of(url: str) -> str:
    parts = url.split("/")
    return parts[2] if len(parts) > 2 else url


def _clock(now: datetime) -> str:
    return now.strftime("%Y-%m-%d %H:%M:%S")


# --- git ---

GIT_USAGE = """usage: git [--version] [--help] [-C <path>] [-c <name>=<value>]
           [--exec-path[=<path>]] [--html-path] [--man-path] [--info-path]
           [-p | --paginate | -P | --no-pager] [--no-replace-objects] [--bare]
           [--git-dir=<path>] [--work-tree=<path>] [--namespace=<name>]
           <command> [<args>]"""

GIT_CLONE_TRANSCRIPT = """Cloning into '{name}'...
remote: Enumerating objects: 156, done.
remote: Counting objects: 100% (156/156), done.
remote: Compressing objects: 100% (98/98), done.
remote: Total 156 (delta 45), reused 132 (delta 34), pack-reused 0
Receiving objects: 100% (156/156), 45.67 KiB | 1.52 MiB/s, done.
Resolving deltas: 100% (45/45), done."""


def repository_name(url: str) -> str:
    name = url.rstrip("/").split("/")[-1].removesuffix(".git")
    return name or "repository"


def git_clone(url: str, repo_path: str) -> CannedResponse:
    name = repository_name(url)
    files = {
        "README.md": f"# {name}\n\nCloned from {url}",
        ".gitignore": "node_modules/\n*.log\n.env",
        "package.json": (
            "{\n"
            f'  "name": "{name}",\n'
            '  "version": "1.0.0",\n'
            '  "description": "Cloned repository"\n'
            "}"
        ),
    }
    effects = [NodeSpec(path=repo_path, kind="directory")]
    effects += [
        NodeSpec(path=f"{repo_path}/{file_name}", kind="file", content=content)
        for file_name, content in files.items()
    ]
    return CannedResponse(output=GIT_CLONE_TRANSCRIPT.format(name=name), effects=effects)


def git_subcommand(subcommand: str, cwd: str) -> CannedResponse:
    match subcommand:
        case "status":
            return CannedResponse(
                output="On branch main\nYour branch is up to date with 'origin/main'.\n\n"
                "nothing to commit, working tree clean"
            )
        case "init":
            base = "" if cwd == "/" else cwd
            return CannedResponse(output=f"Initialized empty Git repository in {base}/.git/")
        case "add":
            return CannedResponse()
        case "commit":
            return CannedResponse(output="[main 1a2b3c4] Sample commit\n 1 file changed, 1 insertion(+)")
        case "push":
            return CannedResponse(output="Everything up-to-date")
        case "pull":
            return CannedResponse(output="Already up to date.")
        case _:
            return CannedResponse(
                output=f"git: '{subcommand}' is not a git command. See 'git --help'.",
                error="Unknown git command",
            )


# --- network ---

def curl_response(url: str, now: datetime) -> CannedResponse:
    body = (
        "{\n"
        '  "message": "Success",\n'
        f'  "url": "{url}",\n'
        '  "method": "GET",\n'
        f'  "timestamp": "{now.isoformat()}"\n'
        "}"
    )
    output = (
        "HTTP/1.1 200 OK\n"
        "Content-Type: application/json\n"
        f"Content-Length: {byte_size(body)}\n\n"
        f"{body}"
    )
    return CannedResponse(output=output)


def download_name(url: str) -> str:
    _, _, resource = url.split("://", 1)[-1].partition("/")
    resource = resource.split("?")[0].rstrip("/")
    return resource.split("/")[-1] if resource else "index.html"


def wget_download(url: str, target_path: str, now: datetime) -> CannedResponse:
    filename = download_name(url)
    host = _host_of(url)
    stamp = _clock(now)
    output = f"""--{stamp}--  {url}
Resolving {host}... 192.168.1.1
Connecting to {host}|192.168.1.1|:80... connected.
HTTP request sent, awaiting response... 200 OK
Length: 2048 (2.0K) [text/html]
Saving to: '{filename}'

{filename:<20}100%[===================>]   2.00K  --.-KB/s    in 0s

{stamp} (10.2 MB/s) - '{filename}' saved [2048/2048]"""
    content = (
        "<!DOCTYPE html>\n<html>\n<head><title>Downloaded content</title></head>\n"
        f"<body><h1>Sample content from {url}</h1></body>\n</html>"
    )
    effect = NodeSpec(path=target_path, kind="file", content=content, size="2048")
    return CannedResponse(output=output, effects=[effect])


SSH_USAGE = (
    "usage: ssh [-46AaCfGgKkMNnqsTtVvXxYy] [-B bind_interface]\n"
    "           [-b bind_address] [-c cipher_spec] [-D [bind_address:]port]"
)
SCP_USAGE = "usage: scp [-346BCpqrTv] [-c cipher] [-F ssh_config] [-i identity_file]"


def ssh_connect(host: str) -> CannedResponse:
    host = host.split("@")[-1]
    return CannedResponse(
        output=f"ssh: connect to host {host} port 22: Connection refused",
        error="Connection refused",
    )


def scp_copy(source: str, destination: str) -> CannedResponse:
    remote = destination if ":" in destination else source
    host = remote.split(":")[0].split("@")[-1]
    return CannedResponse(
        output=f"scp: connect to host {host} port 22: Connection refused",
        error="Connection refused",
    )


def rsync_transfer(source: str, destination: str) -> CannedResponse:
    return CannedResponse(
        output=f"sending incremental file list\n{source}\n\n"
        "sent 1,234 bytes  received 56 bytes  258.00 bytes/sec\n"
        "total size is 1,234  speedup is 0.96"
    )


# --- interpreters and compilers ---

PYTHON_BANNER = """Python 3.11.0 (main, Oct 24 2022, 18:26:48) [GCC 9.4.0] on linux
Type "help", "copyright", "credits" or "license" for more information.
>>> exit()"""

NODE_BANNER = """Welcome to Node.js v18.17.0.
Type ".help" for more information.
> .exit"""

JAVA_USAGE = """Usage: java [options] <mainclass> [args...]
           (to execute a class)
   or  java [options] -jar <jarfile> [args...]
           (to execute a jar file)"""

JAVAC_USAGE = "Usage: javac <options> <source files>"


def python_run(filename: str) -> CannedResponse:
    return CannedResponse(
        output=f"Running Python script: {filename}\nHello from Python!\n"
        "Script execution completed successfully."
    )


def node_run(filename: str) -> CannedResponse:
    return CannedResponse(
        output=f"Running Node.js script: {filename}\nHello from Node.js!\n"
        "Script execution completed successfully."
    )


def java_run(class_name: str) -> CannedResponse:
    return CannedResponse(
        output=f"Running Java class: {class_name}\nHello from Java!\n"
        "Program execution completed successfully."
    )


def javac_compile(filename: str, class_path: str) -> CannedResponse:
    effect = NodeSpec(
        path=class_path, kind="file", content="Compiled Java bytecode (binary)", size="1024"
    )
    return CannedResponse(output=f"Compiled {filename} successfully.", effects=[effect])


def gcc_compile(source: str, output_name: str, output_path: str) -> CannedResponse:
    effect = NodeSpec(
        path=output_path,
        kind="file",
        content="Compiled executable (binary)",
        permissions=EXECUTABLE_PERMISSIONS,
        size="8192",
    )
    return CannedResponse(
        output=f"Compiled {source} to {output_name} successfully.", effects=[effect]
    )


def make_build(cwd: str) -> CannedResponse:
    return CannedResponse(
        output=f"make: Entering directory '{cwd}'\ngcc -o main main.c\n"
        f"make: Leaving directory '{cwd}'"
    )


# --- package managers ---

NPM_USAGE = """npm <command>

Usage:

npm install        install all the dependencies
npm install <foo>  add the <foo> dependency
npm test           run this package's tests
npm run <foo>      run the script named <foo>
npm <command> -h   quick help on <command>"""

NPM_INSTALL = """npm WARN saveError ENOENT: no such file or directory, open 'package.json'
npm notice created a lockfile as package-lock.json. You should commit this file.
npm WARN enoent ENOENT: no such file or directory, open 'package.json'
npm WARN terminal No description
npm WARN terminal No repository field.
npm WARN terminal No README data
npm WARN terminal No license field.

audited 1 package in 0.5s
found 0 vulnerabilities"""

PIP_USAGE = """
Usage:
  pip <command> [options]

Commands:
  install                     Install packages.
  download                    Download packages.
  uninstall                   Uninstall packages.
  freeze                      Output installed packages in requirements format.
  list                        List installed packages.
  show                        Show information about installed packages."""

PIP_LIST = """Package    Version
---------- -------
pip        23.0.1
setuptools 65.5.0
wheel      0.38.4"""


def npm(args: list[str]) -> CannedResponse:
    if not args:
        return CannedResponse(output=NPM_USAGE)
    match args[0]:
        case "install":
            return CannedResponse(output=NPM_INSTALL)
        case "init":
            return CannedResponse(
                output="This utility will walk you through creating a package.json file.\n"
                "package.json created successfully!"
            )
        case "start":
            return CannedResponse(output="npm ERR! missing script: start", error="Missing script")
        case other:
            return CannedResponse(output=f"Unknown command: {other}", error="Unknown command")


def pip(args: list[str]) -> CannedResponse:
    if not args:
        return CannedResponse(output=PIP_USAGE)
    match args[0]:
        case "install":
            package = args[1] if len(args) > 1 else "package"
            return CannedResponse(
                output=f"Collecting {package}\n"
                f"  Downloading {package}-1.0.0-py3-none-any.whl (50 kB)\n"
                f"Installing collected packages: {package}\n"
                f"Successfully installed {package}-1.0.0"
            )
        case "list":
            return CannedResponse(output=PIP_LIST)
        case other:
            return CannedResponse(output=f"Unknown command: {other}", error="Unknown command")


# --- editors and archives ---

def editor_session(editor: str, filename: str) -> CannedResponse:
    return CannedResponse(
        output=f"Opening {filename} with {editor}...\n"
        f"{editor}: Editor simulation - file opened successfully.\n"
        "Use Ctrl+X to exit (nano) or :q to quit (vim)."
    )


TAR_NO_MODE = "tar: You must specify one of the '-Acdtrux', '--delete' or '--test-label' options"


def tar(args: list[str]) -> CannedResponse:
    if not args:
        return CannedResponse(output=TAR_NO_MODE, error="Missing options")
    option = args[0]
    archive = "archive.tar"
    if "-f" in args and args.index("-f") + 1 < len(args):
        archive = args[args.index("-f") + 1]
    elif "f" in option and len(args) > 1:
        archive = args[1]
    if "c" in option:
        return CannedResponse(output=f"Created archive: {archive}")
    if "x" in option:
        return CannedResponse(output=f"Extracted archive: {archive}")
    return CannedResponse(output="tar: operation completed")


def zip_archive(archive: str) -> CannedResponse:
    return CannedResponse(
        output=f"  adding: files (deflated 50%)\nArchive {archive} created successfully."
    )


def unzip_archive(archive: str) -> CannedResponse:
    return CannedResponse(
        output=f"Archive:  {archive}\n  inflating: file1.txt\n  inflating: file2.txt\n"
        "Extraction completed."
    )
