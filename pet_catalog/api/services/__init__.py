# This file marks the services package for catalog read services and storage executors.
