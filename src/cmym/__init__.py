"""CMYM: review and correct music tags stage by stage."""
