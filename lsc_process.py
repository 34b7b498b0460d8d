#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging
import lsc_fetch, lsc_links


VERSION = 1


class SpamClassifier():

  """
  Link classification state for a single content check.

  Verdicts are memoized per (link, remaining budget): the same link probed with more budget can reach
  block-listed domains a shallower probe can not, so both are distinct entries.
  """

  def __init__(self, spam_domains, fetcher):
    self.spam_domains = frozenset(spam_domains)
    self.fetcher = fetcher
    self.memo = {}
    self.fetch_count = 0

  def check(self, content, redirection_depth):
    if not isinstance(redirection_depth, int) or isinstance(redirection_depth, bool) or redirection_depth < 0:
      raise ValueError("Redirection depth must be a non-negative integer, got %r" % (redirection_depth,))
    links = lsc_links.extract_links(content)
    logging.getLogger().debug("Found %d links in content, redirection depth is %d" % (len(links), redirection_depth))
    return self.classify(links, redirection_depth)

  def classify(self, links, budget):
    for link in links:
      if self.checkLink(link, budget):
        return True
    return False

  def checkLink(self, link, budget):
    key = (link, budget)
    try:
      is_spam = self.memo[key]
    except KeyError:
      pass
    else:
      logging.getLogger().debug("Reusing verdict for '%s' with budget %d" % (link, budget))
      return is_spam

    is_spam = self.analyzeLink(link, budget)
    self.memo[key] = is_spam
    return is_spam

  def lookupDomain(self, link):
    # None when the link has no resolvable domain
    try:
      return lsc_links.extract_domain(link)
    except lsc_links.InvalidUrl as e:
      logging.getLogger().warning(e)
      return None

  def isBlockedDomain(self, domain, link):
    if domain in self.spam_domains:
      logging.getLogger().info("Domain '%s' of link '%s' is block-listed" % (domain, link))
      return True
    return False

  def isBlocked(self, link):
    domain = self.lookupDomain(link)
    return domain is not None and self.isBlockedDomain(domain, link)

  def analyzeLink(self, link, budget):
    logging.getLogger().debug("Checking link '%s' with budget %d" % (link, budget))
    domain = self.lookupDomain(link)
    if domain is None:
      return False
    if self.isBlockedDomain(domain, link):
      return True
    if not budget:
      return False

    try:
      self.fetch_count += 1
      page = self.fetcher.fetch(link)
    except lsc_fetch.NetworkError as e:
      logging.getLogger().warning(e)
      return False

    if page.was_redirected:
      if self.isBlocked(page.final_url) or self.checkLink(page.final_url, budget - 1):
        return True

    # anchors always come from the body the original link returned, even for a redirect
    anchors = lsc_links.extract_links(page.body_text)
    logging.getLogger().debug("Found %d anchor links in '%s'" % (len(anchors), link))
    if any(self.isBlocked(anchor) for anchor in anchors):
      return True
    return self.classify(anchors, budget - 1)


def is_spam(content, spam_domains, redirection_depth, fetcher=None):
  if fetcher is None:
    fetcher = lsc_fetch.HttpFetcher()
  return SpamClassifier(spam_domains, fetcher).check(content, redirection_depth)
