# aurionshell

An interactive command shell with DOS and Unix style commands. It works on a
small filesystem that is kept in fixed sectors of a disk image. Files,
directories, users and the current directory are written to the image after
each change. When the shell is started again on the same image, they are
still there.

## Installation

```
pip install .
```

## Running the shell

```
aurionshell
aurionshell --disk disk.img
aurionshell --disk disk.img -c "MKDIR docs" -c "DIR"
aurionshell -c "NANO notes.txt" --keys "hello\x1b"
```

The shell accepts these options:

- `--disk FILE`: the disk image. The file is created if it does not exist.
  Without this option the disk is kept in memory and is lost on exit.
- `-c LINE`, `--command LINE`: runs this command line and then exits. You
  can give the option more than once.
- `--keys TEXT`: keyboard input for interactive commands such as `NANO`,
  `PASSWD`, `FORMAT`, `READ` and `SUDO`. Backslash escapes are allowed,
  for example `\x1b` for ESC.

When you give no `-c` option, the shell reads command lines from standard
input until end of input. Command names are not case sensitive. For an
unknown name the shell prints `Unknown command: NAME`.

## Commands

- **Files:** `DIR`/`LS`, `CD`, `PWD`, `MKDIR`, `RMDIR`, `TOUCH`, `DEL`/`RM`,
  `CAT`/`TYPE`, `NANO`, `COPY`/`CP`, `MOVE`/`MV`/`REN`/`RENAME`, `FIND`,
  `TREE`, `ATTRIB`, `CHMOD`
- **Text:** `WC`, `HEAD`, `TAIL`, `GREP`, `DIFF`, `OD`, `NL`, `TAC`,
  `STRINGS`, `MORE`/`LESS`, `FILE`, `STAT`
- **Disk:** `CHKDSK`/`FSCK`, `FORMAT`, `DF`, `DU`, `MOUNT`, `UMOUNT`, `SYNC`,
  `VOL`, `DISKPART`, `LSBLK`, `FDISK`, `BLKID`, `READSECTOR`
- **Users and processes:** `USERADD`, `USERDEL`, `PASSWD`, `USERS`,
  `LOGIN`/`SU`, `LOGOUT`, `WHOAMI`, `ID`, `W`/`WHO`, `LAST`, `SUDO`,
  `PS`/`TASKLIST`, `TOP`, `KILL`/`TASKKILL`
- **Environment:** `SET`/`PRINTENV`, `EXPORT`, `UNSET`, `ALIAS`, `UNALIAS`,
  `HISTORY`, `PATH`, `PROMPT`, `LET`, `TEST`, `TRUE`, `FALSE`, `WHICH`/`WHEREIS`
- **Other:** `ECHO`, `PRINTF`, `READ`, `COLOR`, `CALC`, `HASH`, `BASE64`,
  `REV`, `FACTOR`, `SEQ`, `SHUF`, `YES`, `COWSAY`, `BANNER`/`FIGLET`,
  `FORTUNE`, `CAL`, `TIME`, `DATE`, `UPTIME`, `ASCII`, `KEYBOARD`, `UNAME`,
  `HOSTNAME`, `VER`/`VERSION`, `HELP`/`?`, `CLS`/`CLEAR`, `PAUSE`, `SLEEP`,
  `TIMEOUT`, `NICE`, `NOHUP`

`NANO` saves the file on ESC. Ctrl+C cancels the edit and Ctrl+K clears
the text. A file holds at most 1024 bytes.

`KEYBOARD SERBIAN` switches the keyboard to the Serbian Latin layout. In this
layout the bracket keys type letters: `[` gives `s`, `]` gives `c` and `\`
gives `z`. `KEYBOARD ENGLISH` switches back.

## What it does not do

The shell has no network stack. `IPCONFIG` and `PING` print fixed sample
text. The WiFi commands only print that WiFi is not available. There is no
`NETSTART` or `WGET`.

The shell cannot do the following:

- report memory statistics (`MEM`, `FREE`, `SYSINFO`);
- scan hardware (`LSPCI`);
- reboot, shut down or halt;
- draw graphics.

Graphical applications such as `NOTEPAD` and `PAINT` print only a notice
that they need a desktop. There are no scripting or build commands.
`HELP` still lists some of these names.

The process table is a fixed simulated list, and `KILL` only removes entries
from it.

## Using it as a library

Every command function takes a `Session` and an argument string. A `Session`
joins a `Console` to a `FileSystem`. The `Console` stores output and hands
out queued key codes. The `FileSystem` sits on a `SectorDisk`.

```python
from aurionshell.console import Console
from aurionshell.disk import SectorDisk
from aurionshell.filesystem import FileSystem
from aurionshell.session import Session
from aurionshell.shell import dispatch

with SectorDisk("disk.img", 4096) as disk:
    fs = FileSystem(disk)
    fs.init()
    console = Console([])
    session = Session(console, fs, None, None)
    dispatch(session, "MKDIR docs")
    dispatch(session, "DIR")
    print(console.take())
```

`dispatch` returns the status code of the command. It returns `-255` when
the command is not known.

The other parts of the library work as follows:

- `SectorDisk(None, sectors)` keeps its sectors in memory.
- `Console.feed` queues more keys.
- `Console.getkey` raises `EOFError` when no keys are left.
- `Session` also takes optional `now` and `ticks` callables in place of the
  system clock.

The small helpers are in `aurionshell.textutil`:

- `hash_string`: the 32-bit djb2 hash.
- `to_uint`: reads the leading decimal digits of a string.
- `next_token`: splits the next token off an argument string.
- `hex32`: formats a number as eight hex digits.
- `base64_encode`
- `prime_factors`
- `keyboard_remap`: maps a typed character to a `Layout`.