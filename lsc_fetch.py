#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import collections, http.client, logging, urllib.parse
import httplib2


FetchResult = collections.namedtuple("FetchResult", ("final_url", "was_redirected", "body_text"))


class NetworkError(Exception):

  def __init__(self, url, reason):
    self.url = url
    self.reason = reason

  def __str__(self):
    return "Failed to fetch '%s': %s" % (self.url, self.reason)


class HttpFetcher():

  DEFAULT_TIMEOUT_S = 10
  USER_AGENT = "LSC_Fetcher/1"
  REDIRECT_CODES = frozenset((301, 302, 303, 307, 308))
  SCHEMES = frozenset(("http", "https"))

  def __init__(self, timeout=DEFAULT_TIMEOUT_S, user_agent=USER_AGENT):
    self.user_agent = user_agent
    self.http_client = httplib2.Http(timeout=timeout)
    # one fetch is one hop, the classifier follows redirects itself
    self.http_client.follow_redirects = False

  def fetch(self, url):
    logging.getLogger().debug("Fetching '%s'" % (url))
    if urllib.parse.urlsplit(url).scheme.lower() not in __class__.SCHEMES:
      raise NetworkError(url, "unsupported scheme")
    try:
      response, content = self.http_client.request(url, "GET", headers={"user-agent": self.user_agent})
    except (httplib2.HttpLib2Error, http.client.HTTPException, OSError, UnicodeError) as e:
      raise NetworkError(url, e)

    http_code = int(response.status)
    if http_code in __class__.REDIRECT_CODES and "location" in response:
      final_url = urllib.parse.urljoin(url, response["location"])
      logging.getLogger().debug("'%s' redirects to '%s' (HTTP %d)" % (url, final_url, http_code))
      return FetchResult(final_url, True, __class__.decodeBody(response, content))

    return FetchResult(url, False, __class__.decodeBody(response, content))

  @staticmethod
  def decodeBody(response, content):
    charset = "utf-8"
    for param in response.get("content-type", "").split(";")[1:]:
      key, _, value = param.partition("=")
      if key.strip().lower() == "charset" and value.strip():
        charset = value.strip().strip("\"'")
    try:
      return content.decode(charset, "replace")
    except LookupError:
      # unknown charset name
      return content.decode("utf-8", "replace")
