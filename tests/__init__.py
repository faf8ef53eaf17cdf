"""
pulumi_propel test suite.
"""
