"""
ECR 作业存储核心包
"""
