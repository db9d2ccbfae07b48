"""Fixed CI/CD pipeline definitions keyed by CI/CD system name."""

from typing import Dict

from loguru import logger

NO_PIPELINE = "# No CI/CD config generated"

GITHUB_ACTIONS = """name: CI/CD

on: [push]

jobs:
  deploy:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Set up Terraform
        uses: hashicorp/setup-terraform@v3
      - run: terraform init
      - run: terraform apply -auto-approve
"""

AZURE_DEVOPS = """trigger:
- main

stages:
- stage: Deploy
  jobs:
  - job: Terraform
    pool:
      vmImage: ubuntu-latest
    steps:
    - checkout: self
    - task: TerraformInstaller@1
      inputs:
        terraformVersion: latest
    - task: TerraformCLI@1
      inputs:
        command: 'init'
    - task: TerraformCLI@1
      inputs:
        command: 'apply'
        commandOptions: '-auto-approve'
"""

GITLAB_CI = """stages:
  - deploy

deploy-job:
  stage: deploy
  image: hashicorp/terraform:light
  script:
    - terraform init
    - terraform apply -auto-approve
"""

PIPELINES: Dict[str, str] = {
    "GitHub Actions": GITHUB_ACTIONS,
    "Azure DevOps": AZURE_DEVOPS,
    "GitLab CI": GITLAB_CI,
}

# Conventional file location of each pipeline definition inside a repository.
PIPELINE_FILENAMES: Dict[str, str] = {
    "GitHub Actions": ".github/workflows/deploy.yml",
    "Azure DevOps": "azure-pipelines.yml",
    "GitLab CI": ".gitlab-ci.yml",
}


def select_pipeline(cicd: str) -> str:
    """Return the pipeline definition for a CI/CD system, or a fallback comment."""
    pipeline = PIPELINES.get(cicd)
    if pipeline is None:
        logger.warning("No pipeline template for CI/CD system {!r}", cicd)
        return NO_PIPELINE
    return pipeline


def pipeline_filename(cicd: str) -> str:
    return PIPELINE_FILENAMES.get(cicd, "pipeline.txt")
