"""Working examples of Unix systems programming: sockets, a web chat server, IPC, threads, file I/O, signals and a mini shell."""

__version__ = "0.1.0"