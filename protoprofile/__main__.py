# coding=utf-8
import sys

from protoprofile.main import main

sys.exit(main())
