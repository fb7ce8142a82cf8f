#!/usr/bin/env python3
"""
AWS CDK App for the Category Filter infrastructure.
"""
import os
import json
from aws_cdk import App, Environment
from stacks.category_filter_stack import CategoryFilterStack

app = App()

# Get environment from context (default to dev)
env_name = app.node.try_get_context("env") or app.node.try_get_context("environment") or "dev"

# Load environment-specific configuration
config_path = os.path.join(os.path.dirname(__file__), "config", f"{env_name}.json")
with open(config_path, "r") as f:
    config = json.load(f)

env = Environment(
    account=config.get("account"),
    region=config.get("region", "us-east-1")
)

CategoryFilterStack(
    app,
    f"CategoryFilter-{env_name}",
    env=env,
    config=config,
    env_name=env_name,
)

app.synth()
