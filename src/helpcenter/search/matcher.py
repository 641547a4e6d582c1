from abc import ABC, abstractmethod
from enum import Enum
from ..domain.article import Article


class MatchStrategy(str, Enum):
  # question, answer and tags, for sources that carry a searchable corpus
  multi_field = "multi_field"

  # question text only, for the live category -> article tree
  question = "question"


class Matcher(ABC):

  strategy: MatchStrategy

  @abstractmethod
  def matches(self, query: str, article: Article) -> bool:
    """'query' must already be normalized, see search.normalizer."""
    raise NotImplementedError


class MultiFieldMatcher(Matcher):

  strategy = MatchStrategy.multi_field

  def matches(self, query: str, article: Article) -> bool:
    if query in article.question.lower():
      return True

    if article.answer is not None and query in article.answer.lower():
      return True

    # an empty tag set never matches
    return any(query in tag.lower() for tag in article.tags)


class QuestionMatcher(Matcher):

  strategy = MatchStrategy.question

  def matches(self, query: str, article: Article) -> bool:
    return query in article.question.lower()


matchers: dict[MatchStrategy, type[Matcher]] = {
  MatchStrategy.multi_field: MultiFieldMatcher,
  MatchStrategy.question: QuestionMatcher,
}


def build_matcher(strategy: MatchStrategy | str) -> Matcher:
  return matchers[MatchStrategy(strategy)]()
