"""
ECR Job Store HTTP API
"""
