import sys

from md2nsx.cli import main

if __name__ == '__main__':
    # 例: python main.py -n "读书笔记" output/读书笔记/
    sys.exit(main())
