#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import re, urllib.parse


# scheme://host[/path][?query][#fragment], stopping at whitespace and quotes
LINK_REGEX = re.compile(r"""https?://[A-Za-z0-9.\-]+(?:/[^\s"'?#]*)?(?:\?[^\s"'#]*)?(?:#[^\s"']*)?""", re.IGNORECASE)


class InvalidUrl(Exception):

  def __init__(self, link):
    self.link = link

  def __str__(self):
    return "Invalid URL '%s'" % (self.link)


def extract_links(text):
  """ Return all absolute http(s) links found in text, in order of appearance, duplicates included. """
  if not text:
    return []
  return LINK_REGEX.findall(text)


def extract_domain(link):
  """ Return the lowercase hostname of link, or raise InvalidUrl. """
  try:
    parsed_url = urllib.parse.urlsplit(link)
    hostname = parsed_url.hostname
  except (ValueError, TypeError, AttributeError):
    raise InvalidUrl(link)
  # a link ending a sentence keeps the period on its host
  if hostname and hostname.endswith("."):
    hostname = hostname[:-1]
  if not parsed_url.scheme or not hostname:
    raise InvalidUrl(link)
  return hostname
