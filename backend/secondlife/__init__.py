"""SecondLife Exchange backend"""
