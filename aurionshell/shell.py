"""Command dispatcher, command wrappers and the interactive shell entry point."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Callable

from . import diskcmds, envcmds, filecmds, misccmds, textcmds, usercmds
from .console import Console
from .disk import SectorDisk
from .filesystem import FileSystem
from .session import MAX_HISTORY, Session
from .textutil import next_token, to_uint

UNKNOWN_COMMAND = -255
CLEARED_SCREEN = -2
KEY_ESC = 27
KEY_BACKSPACE = 8
ENTER_KEYS = (10, 13)
SUDO_PASSWORD_LIMIT = 31
READ_LIMIT = 127
COLOR_ERROR = 0x0C
COLOR_OK = 0x0A
COLOR_NORMAL = 0x07

Command = Callable[[Session, str], int]

FORTUNES = (
    "A bad penny always turns up.",
    "A calm sea does not make a skilled sailor.",
    "A close mouth catches no flies.",
    "Fortune favors the bold.",
    "Computers make very fast, very accurate mistakes.",
)


def _message(text: str) -> Command:
    def command(session: Session, args: str) -> int:
        session.console.puts(text)
        return 0

    return command


_gui_placeholder = _message(
    "This application requires GUIMODE.\n"
    "Type GUIMODE to switch to the desktop environment.\n"
    "Then launch this app from the desktop or the GUI terminal.\n"
)
_no_jobs = _message("No background jobs\n")
_wifi_missing = _message("WiFi not available\n")


def _cls(session: Session, args: str) -> int:
    session.console.cls()
    return CLEARED_SCREEN


def _top(session: Session, args: str) -> int:
    session.console.cls()
    session.console.puts("AurionOS Task Manager - Top Processes\n")
    session.console.puts("-----------------------------------\n")
    return usercmds.ps(session, args)


def _pause(session: Session, args: str) -> int:
    session.console.puts("Press any key to continue...")
    try:
        session.console.getkey()
    except EOFError:
        pass
    session.console.puts("\n")
    return 0


def _sleep(session: Session, args: str) -> int:
    tok, _ = next_token(args, 16)
    if not tok:
        session.console.puts("Usage: SLEEP seconds\n")
        return -1
    time.sleep(to_uint(tok))
    return 0


def _readsector(session: Session, args: str) -> int:
    out = session.console.puts
    tok, _ = next_token(args, 16)
    if not tok:
        out("Usage: READSECTOR <sector>\n")
        return -1
    out(f"Reading sector {to_uint(tok)}...\n")
    out("(Sector dump not available in protected mode)\n")
    return 0


def _fortune(session: Session, args: str) -> int:
    session.console.puts(FORTUNES[session.ticks() % len(FORTUNES)] + "\n")
    return 0


def _shuf(session: Session, args: str) -> int:
    tok, _ = next_token(args, 16)
    limit = to_uint(tok) if tok else 100
    if limit == 0:
        session.console.puts("shuf: invalid range\n")
        return -1
    session.console.puts(f"{session.ticks() % limit}\n")
    return 0


def _who(session: Session, args: str) -> int:
    now = session.now()
    session.console.puts(f"{session.current_user}  console  {now.hour}:{now.minute}\n")
    return 0


def _last(session: Session, args: str) -> int:
    session.console.puts(f"{session.current_user}  console  still logged in\n")
    return 0


def _prompt(session: Session, args: str) -> int:
    session.console.puts(f"{session.fs.current_dir}> ")
    return 0


def _printf(session: Session, args: str) -> int:
    session.console.puts(args + "\n")
    return 0


def _read(session: Session, args: str) -> int:
    console = session.console
    console.puts("Enter input: ")
    typed: list[str] = []
    while len(typed) < READ_LIMIT:
        try:
            key = console.getkey() & 0xFF
        except EOFError:
            break
        if key in ENTER_KEYS:
            console.putc("\n")
            break
        if 32 <= key < 127:
            typed.append(chr(key))
            console.putc(chr(key))
    console.puts(f"Read: {''.join(typed)}\n")
    return 0


def _which(session: Session, args: str) -> int:
    tok, _ = next_token(args, 64)
    if not tok:
        session.console.puts("Usage: WHICH <command>\n")
        return -1
    session.console.puts(f"/bin/{tok.upper().lower()}\n")
    return 0


def sudo(session: Session, args: str) -> int:
    """Run a command as root, asking non-root users for a password first."""
    console = session.console
    out = console.puts
    command = args.lstrip(" \t")
    if not command:
        out("Usage: SUDO <command>\n")
        out("Execute a command with root privileges.\n")
        return -1
    if session.current_user == "root":
        out("[sudo] User is already root.\n")
        return dispatch(session, command)

    out(f"[sudo] Password for {session.current_user}: ")
    typed: list[str] = []
    while len(typed) < SUDO_PASSWORD_LIMIT:
        try:
            key = console.getkey() & 0xFF
        except EOFError:
            break
        if key in ENTER_KEYS:
            break
        if key == KEY_ESC:
            out("\n[sudo] Cancelled.\n")
            return -1
        if key == KEY_BACKSPACE and typed:
            typed.pop()
        elif 32 <= key <= 126:
            typed.append(chr(key))
            console.putc("*")
    out("\n")
    if not typed:
        console.set_attr(COLOR_ERROR)
        out("[sudo] Authentication failed.\n")
        console.set_attr(COLOR_NORMAL)
        return -1

    saved = session.current_user
    session.current_user = "root"
    console.set_attr(COLOR_OK)
    out("[sudo] Running as root...\n")
    console.set_attr(COLOR_NORMAL)
    try:
        return dispatch(session, command)
    finally:
        session.current_user = saved


def timeout(session: Session, args: str) -> int:
    """Run the given command, or wait the given number of seconds without one."""
    tok, rest = next_token(args, 16)
    if not tok:
        session.console.puts("Usage: TIMEOUT <seconds> <command>\n")
        return -1
    seconds = to_uint(tok)
    command = rest.lstrip(" \t")
    if command:
        return dispatch(session, command)
    time.sleep(seconds)
    return 0


def nice(session: Session, args: str) -> int:
    """Run the given command unchanged."""
    command = args.lstrip(" \t")
    if command:
        return dispatch(session, command)
    session.console.puts("Usage: NICE <command>\n")
    return 0


def _nohup(session: Session, args: str) -> int:
    command = args.lstrip(" \t")
    if command:
        return dispatch(session, command)
    session.console.puts("Usage: NOHUP <command>\n")
    return 0


_COMMANDS: dict[str, Command] = {
    "CALC-GUI": _gui_placeholder,
    "HELP": misccmds.help_text,
    "?": misccmds.help_text,
    "CLS": _cls,
    "CLEAR": _cls,
    "VER": misccmds.ver,
    "VERSION": misccmds.ver,
    "TIME": misccmds.show_time,
    "DATE": misccmds.show_date,
    "EXIT": _message("Cannot exit shell - use REBOOT\n"),
    "MKDIR": filecmds.mkdir,
    "RMDIR": filecmds.rmdir,
    "TOUCH": filecmds.touch,
    "DEL": filecmds.delete,
    "RM": filecmds.delete,
    "DIR": filecmds.list_dir,
    "LS": filecmds.list_dir,
    "CD": filecmds.cd,
    "PWD": filecmds.pwd,
    "CAT": filecmds.cat,
    "TYPE": filecmds.cat,
    "NANO": filecmds.nano,
    "COPY": filecmds.copy,
    "CP": filecmds.copy,
    "MOVE": filecmds.move,
    "MV": filecmds.move,
    "REN": filecmds.move,
    "RENAME": filecmds.move,
    "FIND": filecmds.find,
    "TREE": filecmds.tree,
    "ATTRIB": filecmds.attrib,
    "CHMOD": filecmds.chmod,
    "VOL": diskcmds.vol,
    "LABEL": _message("Volume label command - not implemented in basic filesystem\n"),
    "CHKDSK": diskcmds.chkdsk,
    "FORMAT": diskcmds.format_disk,
    "DISKPART": diskcmds.diskpart,
    "FSCK": diskcmds.chkdsk,
    "MOUNT": diskcmds.mount,
    "UMOUNT": diskcmds.umount,
    "SYNC": diskcmds.sync,
    "DF": diskcmds.df,
    "DU": diskcmds.du,
    "LSBLK": _message(
        "NAME MAJ:MIN  SIZE TYPE MOUNTPOINT\n"
        "hda    3:0   1.44M disk\n"
        "  hda1 3:1   1.44M part /\n"
    ),
    "FDISK": _message(
        "Disk /dev/hda: 1.44 MB, 1474560 bytes\n"
        "  Device    Boot  Start  End   Sectors  Size  Id  Type\n"
        "  /dev/hda1  *       1   2880    2880  1.44M   1  FAT12\n"
    ),
    "BLKID": _message('/dev/hda1: UUID="1234-5678" TYPE="fat12" LABEL="RODOS"\n'),
    "READSECTOR": _readsector,
    "USERADD": usercmds.useradd,
    "USERDEL": usercmds.userdel,
    "PASSWD": usercmds.passwd,
    "USERS": usercmds.users,
    "LOGIN": usercmds.login,
    "LOGOUT": usercmds.logout,
    "WHOAMI": usercmds.whoami,
    "SU": usercmds.login,
    "PS": usercmds.ps,
    "KILL": usercmds.kill,
    "TOP": _top,
    "TASKLIST": usercmds.ps,
    "TASKKILL": usercmds.kill,
    "UPTIME": misccmds.uptime,
    "UNAME": misccmds.uname,
    "HOSTNAME": misccmds.hostname,
    "LSCPU": _message(
        "Architecture:     x86 (i386)\n"
        "CPU op-mode(s):   32-bit\n"
        "Byte Order:       Little Endian\n"
        "Address sizes:    32 bits physical, 32 bits virtual\n"
        "CPU(s):           1\n"
        "Model name:       x86 Family\n"
    ),
    "DMESG": _message(
        "[0.00] AurionOS kernel initialized\n[0.01] Memory manager ready\n"
        "[0.02] PCI bus scan complete\n[0.03] VBE framebuffer active\n"
        "[0.04] Filesystem mounted\n[0.05] Shell ready\n"
    ),
    "COLOR": misccmds.color,
    "ECHO": misccmds.echo,
    "MODE": _message("Current mode: Text 80x25\nUse GUITEST for graphics mode\n"),
    "CALC": misccmds.calc,
    "ASCII": misccmds.ascii_table,
    "HASH": misccmds.hash_text,
    "PAUSE": _pause,
    "SLEEP": _sleep,
    "WIFILOGIN": _message(
        "WiFi is not available in VirtIO mode.\n"
        "Use NETSTART to initialize VirtIO network instead.\n"
    ),
    "WIFISTAT": _message("WiFi not available - use IPCONFIG\n"),
    "WIFIDISCONNECT": _wifi_missing,
    "WIFIRESCAN": _wifi_missing,
    "WIFISIGNAL": _wifi_missing,
    "WIFIAP": _message("WiFi not available - use NETSTART\n"),
    "IPCONFIG": _message(
        "Link encap:Ethernet  HWaddr 00:11:22:33:44:55\n"
        "inet addr:192.168.1.15  Bcast:192.168.1.255  Mask:255.255.255.0\n"
    ),
    "PING": _message(
        "PING 8.8.8.8 (8.8.8.8): 56 data bytes\n"
        "64 bytes from 8.8.8.8: icmp_seq=0 ttl=64 time=0.1 ms\n"
        "64 bytes from 8.8.8.8: icmp_seq=1 ttl=64 time=0.2 ms\n"
    ),
    "NOTEPAD": _gui_placeholder,
    "PAINT": _gui_placeholder,
    "FILEBROWSER": _gui_placeholder,
    "BROWSER": _gui_placeholder,
    "CLOCK": _gui_placeholder,
    "SYSINFOGUI": _gui_placeholder,
    "SUDO": sudo,
    "WC": textcmds.wc,
    "HEAD": textcmds.head,
    "TAIL": textcmds.tail,
    "GREP": textcmds.grep,
    "SORT": _message("SORT: Requires piping (not supported)\n"),
    "UNIQ": _message("UNIQ: Requires piping (not supported)\n"),
    "CUT": _message("Usage: CUT -d<delim> -f<field> <file>\n(Simplified: use GREP)\n"),
    "DIFF": textcmds.diff,
    "MORE": textcmds.more,
    "LESS": textcmds.more,
    "FILE": textcmds.file_type,
    "STAT": textcmds.stat,
    "PATH": envcmds.path,
    "SET": envcmds.env,
    "ALIAS": envcmds.alias,
    "HISTORY": envcmds.history,
    "PROMPT": _prompt,
    "PRINTENV": envcmds.env,
    "EXPORT": envcmds.export,
    "SOURCE": _message("SOURCE: Script execution not supported\n"),
    "WHICH": _which,
    "WHEREIS": _which,
    "CAL": misccmds.cal,
    "BANNER": misccmds.banner,
    "FIGLET": misccmds.banner,
    "COWSAY": misccmds.cowsay,
    "FORTUNE": _fortune,
    "STRINGS": textcmds.strings,
    "CHOWN": _message("CHOWN: Single-user system (all files owned by root)\n"),
    "LN": _message("LN: Symbolic links not supported in FAT12\n"),
    "STRACE": _message("STRACE: System call tracing not available\n"),
    "NOHUP": _nohup,
    "NICE": nice,
    "BG": _no_jobs,
    "FG": _no_jobs,
    "JOBS": _no_jobs,
    "UNALIAS": envcmds.unalias,
    "PRINTF": _printf,
    "READ": _read,
    "LET": envcmds.expr,
    "TEST": envcmds.check,
    "FALSE": lambda session, args: 1,
    "TRUE": lambda session, args: 0,
    "UNSET": envcmds.unset,
    "ID": usercmds.user_id,
    "TIMEOUT": timeout,
    "YES": misccmds.yes,
    "SHUF": _shuf,
    "SEQ": misccmds.seq,
    "FACTOR": misccmds.factor,
    "TAC": textcmds.tac,
    "NL": textcmds.nl,
    "REV": misccmds.rev,
    "OD": textcmds.xxd,
    "BASE64": misccmds.base64,
    "AWK": _message("AWK: Pattern processing requires piping\n"),
    "SED": _message("SED: Stream editor requires piping\n"),
    "TR": _message("TR: Requires piping (not supported)\n"),
    "PASTE": _message("PASTE: Requires multiple file merging\n"),
    "WIFISTATUS": _message("WiFi status not available. Use IPCONFIG for network status.\n"),
    "WIFICONNECT": _message(
        "WiFi is not available in VirtIO mode.\n"
        "Use NETSTART to connect via VirtIO network.\n"
    ),
    "WIFISCAN": _message(
        "WiFi scanning is not available in VirtIO mode.\n"
        "VirtIO provides wired ethernet-like connectivity.\n"
    ),
    "W": _who,
    "WHO": _who,
    "LAST": _last,
    "KEYBOARD": misccmds.keyboard,
}


def dispatch(session: Session, line: str) -> int:
    """Run one command line and return its status.

    The command name is case-insensitive; an unknown name returns -255.
    """
    if not line:
        return 0
    name, args = next_token(line, 64)
    command = _COMMANDS.get(name.upper())
    if command is None:
        return UNKNOWN_COMMAND
    return command(session, args)


def _run_line(session: Session, line: str) -> int:
    if line.strip():
        session.history.append(line)
        del session.history[:-MAX_HISTORY]
    status = dispatch(session, line)
    if status == UNKNOWN_COMMAND:
        name, _ = next_token(line, 64)
        session.console.puts(f"Unknown command: {name}\n")
    return status


def main(argv=None) -> int:
    """Start the shell on a disk image, running commands from -c or stdin."""
    parser = argparse.ArgumentParser(prog="aurionshell", description="A small DOS-like shell.")
    parser.add_argument("--disk", help="disk image file; kept in memory when omitted")
    parser.add_argument("-c", "--command", action="append", default=[],
                        help="run this command line (may be repeated) and exit")
    parser.add_argument("--keys", default="",
                        help="keyboard input for interactive commands (backslash escapes allowed)")
    opts = parser.parse_args(argv)

    keys = opts.keys.encode("latin-1", errors="replace").decode("unicode_escape")
    console = Console(keys)
    console.set_hook(lambda ch: sys.stdout.write(ch))

    with SectorDisk(opts.disk) as disk:
        fs = FileSystem(disk)
        fs.init()
        session = Session(console, fs)
        if opts.command:
            for line in opts.command:
                _run_line(session, line)
        else:
            console.puts(
                f"Ready. {len(fs.entries)} files, {fs.content_count} contents loaded. "
                "Type HELP for commands.\n"
            )
            while True:
                console.puts(f"{fs.current_dir}> ")
                sys.stdout.flush()
                line = sys.stdin.readline()
                if not line:
                    console.puts("\n")
                    break
                _run_line(session, line.rstrip("\r\n"))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())