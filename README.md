# linuxlab

A collection of small, working Unix systems-programming examples. Each one
covers a single topic and comes as an importable module. Many modules also
provide a command you can run from the shell.

Topics covered:

- **Sockets**: a TCP socket wrapper (`linuxlab.tcpsocket.TcpSocket`), a UDP
  socket wrapper (`linuxlab.udpsocket.UdpSocket`), a fixed-response HTTP
  server (`linuxlab.httpdemo`), a turn-by-turn UDP chat (`linuxlab.udpchat`)
  and a `select()`-based multi-client server
  (`linuxlab.selectserver.SelectServer`).
- **A chat server**: a small web chat (`linuxlab.imserver.ImServer`, built on
  aiohttp) with login and registration against a MySQL table
  (`linuxlab.imstore.UserStore`), cookie sessions
  (`linuxlab.imsession.SessionTable`) and WebSocket broadcast of every
  message to every connected client.
- **Threads**: a bounded blocking queue and a semaphore-based ring queue
  (`linuxlab.blockqueue.BlockQueue`, `linuxlab.blockqueue.RingQueue`,
  `run_producers_consumers`), plus condition-variable, mutex and semaphore
  demos (`linuxlab.threaddemos.NoodleShop`, `sell_tickets_mutex`,
  `sell_tickets_semaphore`, `thread_result`).
- **Processes and IPC**: a mini shell with `>`, `>>` and `|`
  (`linuxlab.minishell`), anonymous pipes (`linuxlab.pipes`), named pipes
  (`linuxlab.fifo`) and shared memory holding a text
  (`linuxlab.shm.SharedText`).
- **File I/O, process control and signals**: `linuxlab.fileio`,
  `linuxlab.procdemos` (argument and environment listings, wait-status
  decoding, polling a child) and `linuxlab.signals` (`StopFlag`,
  `blocked_signals`, `one_shot_handler`, `reap_children`,
  `install_child_reaper`).
- **Request signing helpers**: lenient Base64 (`linuxlab.codec`), URL
  canonicalisation and HMAC-SHA256 request signing (`linuxlab.signing.sign`),
  and a small blocking HTTP client (`linuxlab.httpclient.HttpClient`).

## Installation

```
pip install .
```

To also install the tools needed to run the tests:

```
pip install ".[test]"
```

The package needs Python 3.10 or later and a POSIX system.

## Commands

Networking:

```
linuxlab-http 127.0.0.1 8080          # answer every connection with the same fixed HTML page
linuxlab-udp-server 127.0.0.1 9000    # UDP chat, server side: answers each datagram with a word typed in
linuxlab-udp-client 127.0.0.1 9000    # UDP chat, client side: sends each word typed in, prints the reply
linuxlab-select 8888                  # select()-based server that prints what clients send
linuxlab-im [port]                    # web chat server (default port 8080)
```

Processes and IPC:

```
linuxlab-shell                        # mini shell reading commands from standard input
linuxlab-pipe                         # runs `ps -ef | grep ssh` through an anonymous pipe
linuxlab-fifo-read [path]             # print what arrives on a named pipe (default ./test.fifo)
linuxlab-fifo-write [path]            # write whitespace-separated words from standard input into it
linuxlab-shm-write                    # write a counter message into shared memory once a second
linuxlab-shm-read                     # print the shared memory contents once a second
```

Run the FIFO and shared-memory readers and writers in two terminals.

## Using the library

```python
from linuxlab.codec import base64_encode, base64_decode
from linuxlab.blockqueue import BlockQueue

encoded = base64_encode(b"hello")
assert base64_decode(encoded) == b"hello"

queue = BlockQueue(10)
queue.push(1)
assert queue.pop() == 1
```

```python
from linuxlab.minishell import parse_command, run_pipeline

command = parse_command("ls -l >> out.txt")
# Command(argv=['ls', '-l'], redirect=Redirect(path='out.txt', append=True))

statuses = run_pipeline("ls | wc -l")   # exit status of each command
```

## What is not included

- The chat server serves static files from a `web` directory in the current
  directory, but the package ships no pages: the login page, the chat page
  and their scripts must be supplied separately.
- The chat server expects an existing MySQL database `im_db` on
  `localhost:3306` with a `user` table holding `name` and `passwd` columns;
  the package does not create the database or the table.
- The signing helpers and `HttpClient` are generic building blocks; the
  package does not wrap the endpoints of any particular web service.

## Running the tests

```
pytest
```