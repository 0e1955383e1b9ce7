"""Web front for SecondLife Exchange"""
