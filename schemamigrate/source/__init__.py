"""Source drivers that discover, order and read up/down migration files."""