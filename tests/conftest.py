"""
Wspólne fixture'y testów tf-moved-remover.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

RESOURCES_AND_MOVED = """
resource "aws_instance" "web" {
  ami           = "ami-123456"
  instance_type = "t2.micro"
}

moved {
  from = aws_instance.old
  to   = aws_instance.web
}

resource "aws_s3_bucket" "data" {
  bucket = "my-bucket"
}

moved {
  from = aws_s3_bucket.logs
  to   = aws_s3_bucket.data
}
"""

RESOURCES_AFTER_REMOVAL = """
resource "aws_instance" "web" {
  ami           = "ami-123456"
  instance_type = "t2.micro"
}


resource "aws_s3_bucket" "data" {
  bucket = "my-bucket"
}

"""

ONLY_MOVED = """moved {
  from = aws_instance.old
  to   = aws_instance.new
}

moved {
  from = aws_s3_bucket.old
  to   = aws_s3_bucket.new
}

moved {
  from = module.network
  to   = module.vpc
}
"""

COMMENTED_MOVED = """
resource "aws_instance" "web" {
  ami           = "ami-123456"
  instance_type = "t2.micro"
}

# This is a commented moved block
# moved {
#   from = aws_instance.old
#   to   = aws_instance.web
# }
"""

UNFORMATTED = """
resource "aws_instance" "web" {
ami = "ami-123456"
  instance_type   =     "t2.micro"
}
"""

FORMATTED = """
resource "aws_instance" "web" {
  ami           = "ami-123456"
  instance_type = "t2.micro"
}
"""

# Pełniejszy plik: provider, obiekty, heredoc, komentarze, moduł.
COMPLEX = """# Główna konfiguracja
terraform {
  required_providers {
    aws = {
      source  = "hashicorp/aws"
      version = "~> 4.0"
    }
  }
}

provider "aws" {
  region = "us-west-2" # region domyślny
}

locals {
  name   = "web-${var.env}"
  ports  = [80, 443]
  lookup = lookup(var.map, "key", "default")
}

resource "aws_instance" "web_server" {
  ami           = "ami-0c55b159cbfafe1f0"
  instance_type = "t2.micro"
  count         = var.enabled ? 1 : 0

  user_data = <<-EOT
    #!/bin/bash
    echo "hello ${var.name}"
  EOT

  tags = {
    Name = "WebServer"
  }
}

/* blok
   wieloliniowy */
module "vpc" {
  source = "./networking"
}
"""


@pytest.fixture
def write_tf(tmp_path: Path) -> Callable[..., Path]:
    """Zapisuje plik .tf w tmp_path (ścieżka względna może zawierać katalogi)."""
    def _write(relative: str, content: str | bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_bytes(content.encode("utf-8"))
        return path
    return _write
