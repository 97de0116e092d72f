"""
Models Module
=============

Rating update engines. Glicko 2 is the only one for now: it updates a single player from the results of one
rating period, with a rating deviation that shrinks as games are played and a volatility solved for by
Illinois root-finding.
"""
from glicko_engine.models.glicko2 import Glicko2, RatingPeriodContext, new_rating
