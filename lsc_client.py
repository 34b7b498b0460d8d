#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse, logging, sys
import lsc_fetch, lsc_process


class DebugLogRecordFactory():

  def __init__(self):
    self.default_logrecord_factory = logging.getLogRecordFactory()

  def log(self,*args, **kwargs):
    record = self.default_logrecord_factory(*args, **kwargs)
    record.msg = "[LSC] %s" % (record.msg)
    return record


class SpamCheckClient():

  CLIENT_VERSION = 1
  DEFAULT_DEPTH = 1

  def __init__(self,spam_domains,depth=DEFAULT_DEPTH,timeout=lsc_fetch.HttpFetcher.DEFAULT_TIMEOUT_S):
    self.spam_domains = spam_domains
    self.depth = depth
    self.fetcher = lsc_fetch.HttpFetcher(timeout=timeout)

  def check(self,content):
    logging.getLogger().info("Link spam checker client v%d started" % (__class__.CLIENT_VERSION))
    logging.getLogger().info("Link analysis component v%d loaded" % (lsc_process.VERSION))
    logging.getLogger().info("Checking content against %d block-listed domains with redirection depth %d" % (len(self.spam_domains), self.depth))
    is_spam = lsc_process.is_spam(content,self.spam_domains,self.depth,self.fetcher)
    logging.getLogger().info("Content is %s" % ("spam" if is_spam else "clean"))
    return is_spam


def load_blocklist(file_handle):
  # one domain per line, '#' starts a comment
  spam_domains = set()
  for line in file_handle:
    domain = line.split("#",1)[0].strip().lower()
    if domain:
      spam_domains.add(domain)
  return frozenset(spam_domains)


def non_negative_int(value):
  try:
    number = int(value)
  except ValueError:
    raise argparse.ArgumentTypeError("invalid integer value: '%s'" % (value))
  if number < 0:
    raise argparse.ArgumentTypeError("must be >= 0, got %d" % (number))
  return number


def build_cli_parser():
  cli_parser = argparse.ArgumentParser(description="Check if content links to block-listed domains, following redirects and page anchors")
  cli_parser.add_argument("-b",
                          "--blocklist",
                          action="store",
                          required=True,
                          type=argparse.FileType("r"),
                          dest="blocklist",
                          help="File listing spam domains, one per line")
  cli_parser.add_argument("-f",
                          "--file",
                          action="store",
                          type=argparse.FileType("r"),
                          default="-",
                          dest="content_file",
                          help="File holding the content to check (default: stdin)")
  cli_parser.add_argument("-d",
                          "--depth",
                          action="store",
                          type=non_negative_int,
                          default=SpamCheckClient.DEFAULT_DEPTH,
                          dest="depth",
                          help="Maximum number of redirects or page hops to follow per link")
  cli_parser.add_argument("-t",
                          "--timeout",
                          action="store",
                          type=float,
                          default=lsc_fetch.HttpFetcher.DEFAULT_TIMEOUT_S,
                          dest="timeout",
                          help="Timeout in seconds of each HTTP request")
  cli_parser.add_argument("-v",
                          "--verbosity",
                          action="store",
                          choices=("quiet","warning","info","debug"),
                          default="warning",
                          dest="verbosity",
                          help="Level of output to display")
  return cli_parser


def setup_logger(verbosity):
  logger = logging.getLogger()
  if not logger.handlers:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(message)s")
  if verbosity == "quiet":
    logger.setLevel(logging.CRITICAL+1)
  elif verbosity == "warning":
    logger.setLevel(logging.WARNING)
  elif verbosity == "info":
    logger.setLevel(logging.INFO)
  elif verbosity == "debug":
    logger.setLevel(logging.DEBUG)
    logrecord_factory = DebugLogRecordFactory()
    logging.setLogRecordFactory(logrecord_factory.log)


def main(argv=None):
  options = build_cli_parser().parse_args(argv)
  setup_logger(options.verbosity)

  with options.blocklist:
    spam_domains = load_blocklist(options.blocklist)
  content = options.content_file.read()
  if options.content_file is not sys.stdin:
    options.content_file.close()

  client = SpamCheckClient(spam_domains,options.depth,options.timeout)
  is_spam = client.check(content)
  print("spam" if is_spam else "clean")
  return 1 if is_spam else 0


if __name__ == '__main__':
  sys.exit(main())
